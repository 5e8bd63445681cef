"""reformcal: reform-aware calendar dates, conversions, and parsing."""

__version__ = "0.1.0"
