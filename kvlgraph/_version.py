"""Version information for kvlgraph."""

__version__ = "0.1.0"
