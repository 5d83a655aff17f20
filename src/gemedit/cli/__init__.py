"""CLI helpers for the gemedit command."""
