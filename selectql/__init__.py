"""Typed GraphQL query client generator for Python."""

__version__ = "0.1.0"
