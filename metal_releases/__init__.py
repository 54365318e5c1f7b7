"""Heavy metal release calendar built from the wiki and the metal archives."""

__version__ = "0.1.0"
