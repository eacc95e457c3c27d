"""Arcade presentation layer."""
