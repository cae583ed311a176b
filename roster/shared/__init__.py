"""Shared utilities used across layers (logging, ids, time)."""
