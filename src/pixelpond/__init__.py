"""Pixel Pond: an arcade fishing mini-game whose catches are minted on-chain."""

__all__ = ["__version__"]

__version__ = "0.1.0"
