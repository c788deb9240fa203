"""Version control backends."""

from .base import SourceControl
from .perforce import PerforceClient

__all__ = ["SourceControl", "PerforceClient"]
