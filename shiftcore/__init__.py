"""shiftcore - shift scheduling core for production workforce planning."""

__version__ = "0.1.0"
