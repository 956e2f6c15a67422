"""Ephemeris adapters (optional).

This package provides a thin wrapper around a JPL planetary kernel, used to
check the closed-form models. Install with:
  pip install "astrocore[ephemeris]"
"""


def require_ephemeris():
    """Raise a clear error if ephemeris extras aren't installed."""
    try:
        import jplephem  # noqa: F401
        import skyfield  # noqa: F401
    except ImportError as e:
        raise RuntimeError('Ephemeris support requires: pip install "astrocore[ephemeris]"') from e
