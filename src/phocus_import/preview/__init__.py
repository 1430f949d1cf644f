"""Placeholder preview module"""

from .placeholder import PlaceholderGenerator, PlaceholderPreview

__all__ = ["PlaceholderGenerator", "PlaceholderPreview"]
