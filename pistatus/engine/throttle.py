from __future__ import annotations

import logging

from pistatus.models import ThrottleFlags

logger = logging.getLogger(__name__)

# Bit positions of the firmware ``get_throttled`` word.
UNDER_VOLTAGE_NOW_BIT = 0
THROTTLING_NOW_BIT = 2
SOFT_TEMP_LIMIT_NOW_BIT = 3
UNDER_VOLTAGE_PAST_BIT = 16
THROTTLING_PAST_BIT = 18
SOFT_TEMP_LIMIT_PAST_BIT = 19


def parse_bitmask(hex_string: str) -> int:
    """Parse ``0xHHHH`` (prefix optional) as an unsigned int, 0 on failure."""
    text = hex_string.strip()
    try:
        value = int(text, 16)
    except ValueError:
        logger.debug("Unparseable throttle bitmask %r, assuming 0x0", hex_string)
        return 0
    if value < 0:
        logger.debug("Negative throttle bitmask %r, assuming 0x0", hex_string)
        return 0
    return value


def _bit(value: int, bit: int) -> bool:
    return (value & (1 << bit)) != 0


def flags_from_int(value: int) -> ThrottleFlags:
    return ThrottleFlags(
        under_voltage_now=_bit(value, UNDER_VOLTAGE_NOW_BIT),
        under_voltage_past=_bit(value, UNDER_VOLTAGE_PAST_BIT),
        throttling_now=_bit(value, THROTTLING_NOW_BIT),
        throttling_past=_bit(value, THROTTLING_PAST_BIT),
        overheating_now=_bit(value, SOFT_TEMP_LIMIT_NOW_BIT),
        overheating_past=_bit(value, SOFT_TEMP_LIMIT_PAST_BIT),
    )


def decode(hex_string: str) -> ThrottleFlags:
    """Decode the hex throttle word reported by ``vcgencmd get_throttled``."""
    return flags_from_int(parse_bitmask(hex_string))
