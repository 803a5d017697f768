"""Spectacles — track Discord builds as they roll out across branches."""

__version__ = "0.1.0"
