"""Engine pieces and game entities for a small cave platformer built on pygame."""

__version__ = "0.1.0"
__all__ = ["__version__"]