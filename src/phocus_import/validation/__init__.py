"""Input validation module"""

from .raw_validator import RawFileValidator

__all__ = ["RawFileValidator"]
