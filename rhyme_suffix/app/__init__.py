"""Application layer: page automation, services and front-ends."""

from .app import RhymeSuffixApp

__all__ = ["RhymeSuffixApp"]
