from .command import CommandError, run_command
from .network import NetworkIdentity
from .system import SystemSource
from .vcgencmd import FALLBACK_OUTPUT, Reading, ToolReading, VcgencmdAdapter

__all__ = [
    "CommandError",
    "FALLBACK_OUTPUT",
    "NetworkIdentity",
    "Reading",
    "SystemSource",
    "ToolReading",
    "VcgencmdAdapter",
    "run_command",
]
