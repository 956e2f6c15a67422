"""Ephemeris-based diagnostics (need the ephemeris extras and a JPL kernel)."""

__all__ = ["validate_helio"]
