"""Tests for pistatus.collectors.command."""

from __future__ import annotations

import sys

import pytest

from conftest import MISSING_BINARY
from pistatus.collectors.command import CommandError, run_command


@pytest.mark.asyncio
async def test_returns_stripped_stdout():
    out = await run_command([sys.executable, "-c", "print('  HomeNet  ')"])
    assert out == "HomeNet"


@pytest.mark.asyncio
async def test_non_zero_exit_raises():
    with pytest.raises(CommandError, match="exit status 3"):
        await run_command([sys.executable, "-c", "import sys; sys.exit(3)"])


@pytest.mark.asyncio
async def test_missing_binary_raises():
    with pytest.raises(CommandError) as exc_info:
        await run_command([MISSING_BINARY, "-r"])
    assert exc_info.value.command == [MISSING_BINARY, "-r"]


@pytest.mark.asyncio
async def test_timeout_kills_process():
    with pytest.raises(CommandError, match="timed out"):
        await run_command([sys.executable, "-c", "import time; time.sleep(10)"], timeout=0.3)


@pytest.mark.asyncio
async def test_exec_format_error_raises(tmp_path):
    bogus = tmp_path / "vcgencmd"
    bogus.write_bytes(b"\x7fELF\x00garbage")
    bogus.chmod(0o755)
    with pytest.raises(CommandError, match="cannot execute"):
        await run_command([str(bogus), "measure_volts"])
