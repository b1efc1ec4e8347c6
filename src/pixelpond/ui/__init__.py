"""Arcade presentation layer: textures, per-frame rendering and the game window."""
