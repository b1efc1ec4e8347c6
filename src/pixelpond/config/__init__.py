"""Packaged default configuration (YAML resources)."""
