"""Everyday helpers for conversion, formatting, numbers, text, time zones and devices."""

__version__ = "0.1.0"

__all__ = ["convert", "device", "formatting", "numeric", "text", "timeutil"]