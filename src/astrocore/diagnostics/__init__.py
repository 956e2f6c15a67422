"""Diagnostics package.

- diagnostics: numpy/matplotlib plots of the built-in models (no ephemeris)
- diagnostics.ephem: optional (requires ephemeris extras + a JPL kernel)
"""

__all__ = ["plot_deltat"]


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "astrocore[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "astrocore[diagnostics]"') from e
