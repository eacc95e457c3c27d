"""Distort: arcade survival on a warping grid."""

__version__ = "0.1.0"
