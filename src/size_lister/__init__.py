from __future__ import annotations

from .lister import Lister
from .listerconfig import ListerConfig
from .listermodel import DirectoryEntry
from .listermodel import ListResult

__all__ = [
    "DirectoryEntry",
    "ListResult",
    "Lister",
    "ListerConfig",
]
