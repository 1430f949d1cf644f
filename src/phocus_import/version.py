"""Version information for phocus-import"""

__version__ = "1.0.0"
