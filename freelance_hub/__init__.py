"""Freelance Hub: submission publishing to content-addressed storage and service matching."""

__version__ = "0.1.0"
