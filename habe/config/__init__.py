"""Configuration loading modules."""

from .loaders import ConfigLoader, DataLoader

__all__ = ["ConfigLoader", "DataLoader"]
