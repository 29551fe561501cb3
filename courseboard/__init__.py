"""courseboard — a permissioned record store for courses."""

__version__ = "0.1.0"
