from __future__ import annotations

import asyncio
import logging
from typing import Sequence

logger = logging.getLogger(__name__)


class CommandError(Exception):
    """External command was missing, failed, or ran out of time."""

    def __init__(self, args: Sequence[str], reason: str) -> None:
        self.command = list(args)
        self.reason = reason
        super().__init__(f"{' '.join(self.command)}: {reason}")


async def run_command(args: Sequence[str], timeout: float = 2.0) -> str:
    """Run ``args`` and return its stripped stdout.

    Raises ``CommandError`` when the binary cannot be executed, exits non-zero, or
    does not finish within ``timeout`` seconds (the process is killed).
    """
    try:
        proc = await asyncio.create_subprocess_exec(
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.DEVNULL,
        )
    except OSError as exc:
        raise CommandError(args, f"cannot execute ({exc.strerror or exc})") from exc

    try:
        stdout, _ = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except asyncio.TimeoutError as exc:
        proc.kill()
        await proc.wait()
        raise CommandError(args, f"timed out after {timeout:.1f}s") from exc

    if proc.returncode != 0:
        raise CommandError(args, f"exit status {proc.returncode}")
    return stdout.decode(errors="replace").strip()
