"""modctl - Mod folder manager with manifest reconciliation and update checks."""

__version__ = "0.1.0"
