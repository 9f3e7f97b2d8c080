"""Real-time tag game simulation: chasers, runners, safe zones and power-ups."""

__version__ = "0.1.0"
