"""Observability helpers for jsonera."""
