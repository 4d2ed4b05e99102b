from __future__ import annotations

import logging
from typing import Awaitable, Callable, Sequence

from pistatus.collectors.command import CommandError, run_command
from pistatus.exceptions import SourceFailure
from pistatus.models import InterfaceInfo, NetworkDescription

logger = logging.getLogger(__name__)

DEFAULT_LABEL = "Ethernet"

InterfaceTable = Callable[[], Awaitable[list[InterfaceInfo]]]


class NetworkIdentity:
    """Describes the active network path: WiFi SSID first, then wired link.

    Never raises; when neither lookup gives an answer the label falls back to
    ``"Ethernet"``, which is a default rather than a verified fact.
    """

    def __init__(
        self,
        interfaces: InterfaceTable,
        ssid_command: Sequence[str] = ("iwgetid", "-r"),
        timeout: float = 2.0,
    ) -> None:
        self._interfaces = interfaces
        self.ssid_command = list(ssid_command)
        self.timeout = timeout

    async def describe_network(self) -> NetworkDescription:
        ssid = await self._ssid()
        if ssid:
            return NetworkDescription(label=f"WiFi: {ssid}")

        wired = await self._wired_interface()
        if wired is not None:
            if wired.speed > 0:
                return NetworkDescription(label=f"LAN ({wired.speed}Mbps)", speed=wired.speed)
            return NetworkDescription(label="LAN (Connected)")

        return NetworkDescription(label=DEFAULT_LABEL)

    async def _ssid(self) -> str:
        try:
            return await run_command(self.ssid_command, timeout=self.timeout)
        except CommandError as exc:
            logger.debug("SSID lookup failed: %s", exc)
            return ""

    async def _wired_interface(self) -> InterfaceInfo | None:
        try:
            table = await self._interfaces()
        except SourceFailure as exc:
            logger.warning("Interface table unavailable for network label: %s", exc)
            return None
        return next((i for i in table if i.is_up and not i.internal), None)
