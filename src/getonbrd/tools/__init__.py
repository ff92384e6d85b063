"""Helpers built on top of the relationship registry."""
