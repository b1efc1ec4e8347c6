"""Packaged contract ABIs."""
