"""plugman: local plugin repository manager with profiles."""

__version__ = "0.1.0"
