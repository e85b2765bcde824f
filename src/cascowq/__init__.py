"""Casco Bay water-quality cleaning and light extinction pipeline."""

__version__ = "0.1.0"
