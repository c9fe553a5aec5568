"""Second-order Godunov solver for the 2D compressible Euler equations."""

__version__ = "0.1.0"
