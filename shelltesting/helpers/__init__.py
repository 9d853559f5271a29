from .base import TestHelper
from .filesystem import TempFileManager

__all__ = ["TestHelper", "TempFileManager"]
