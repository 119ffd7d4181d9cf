"""Gramin Portal - community bank and Village Development Fund front-end."""

__version__ = "1.0.0"
