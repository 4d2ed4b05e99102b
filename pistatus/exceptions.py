from __future__ import annotations


class EngineError(Exception):
    """Base class for failures surfaced by ``StatusEngine.build_report()``."""


class SourceFailure(EngineError):
    """An OS metric source without a fallback could not be read."""

    def __init__(self, source: str, reason: str = "") -> None:
        self.source = source
        self.reason = reason
        message = f"metric source '{source}' failed"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
