"""SA:MP server runtime configuration."""

__version__ = "0.1.0"
