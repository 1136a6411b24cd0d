"""Reserve data providers."""
from .snapshot import SnapshotProvider

__all__ = ["SnapshotProvider"]
