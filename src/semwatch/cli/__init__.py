"""Command line interface for SemWatch."""

from .main import main

__all__ = ['main']
