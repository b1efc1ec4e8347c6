"""Shared infrastructure: settings, randomness, events and async pumping."""
