"""Order books, market venues, windowed statistics and tile-coded RL agents for market making."""

__version__ = "0.1.0"