"""SnipVault: code snippet storage with linear version history."""

__version__ = "1.0.0"
