"""Smoothed NGC G-code generation with line and arc fitting."""

__version__ = "0.1.0"
