"""Shared helpers: random sources, rounding, logging setup."""
