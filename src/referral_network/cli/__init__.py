"""
CLI package for referral_network.

Provides the Typer application entrypoint and shared CLI utilities.
"""

from referral_network.cli.app import app, main

__all__ = [
    "app",
    "main",
]
