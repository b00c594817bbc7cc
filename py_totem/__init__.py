"""Deterministic, seed-driven totem icon generation."""

__version__ = "0.1.0"
