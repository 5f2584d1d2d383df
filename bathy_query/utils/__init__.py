"""Shared numeric helpers (projection)."""
