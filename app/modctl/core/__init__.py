"""Reconciliation and version-resolution engine for modctl."""
