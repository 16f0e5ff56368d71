"""Shared helpers for the docgrade CLI."""
