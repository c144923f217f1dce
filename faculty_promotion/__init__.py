"""Promotion points tracking and eligibility for academic staff."""

__version__ = "1.0.0"
