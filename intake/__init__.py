"""Claim review intake service: forwards engineer reviews and photos to the insurance platform."""

__version__ = "1.0.0"
