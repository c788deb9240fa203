"""Localization automation: batch gathering, commandlet runs and changelist reconciliation."""

__version__ = "0.1.0"
