"""Shared helpers used across layers (no domain logic)."""
