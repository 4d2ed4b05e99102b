from .assembler import StatusEngine
from .cache import CacheEntry, StatusCache
from .classifier import ClassifierInputs, classify
from .throttle import decode

__all__ = [
    "CacheEntry",
    "ClassifierInputs",
    "StatusCache",
    "StatusEngine",
    "classify",
    "decode",
]
