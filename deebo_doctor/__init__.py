"""Environment doctor for a local deebo installation."""

__version__ = "0.2.0"
