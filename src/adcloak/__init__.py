"""
adcloak - Ad blocker disguise for an ad management extension

Copies the extension's static assets into a randomly named folder with
randomized directory and file names so that pattern-based ad blockers
cannot match them, and keeps the copy in sync incrementally.
"""

__version__ = "1.0.0"

from .core.engine import AssetRelocationEngine
from .core.models import RebuildResult

__all__ = [
    "AssetRelocationEngine",
    "RebuildResult",
]
