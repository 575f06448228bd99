"""Frontends tests."""
