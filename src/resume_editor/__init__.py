"""Résumé document model with a live-preview synchronization layer."""

__version__ = "0.1.0"
