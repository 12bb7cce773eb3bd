"""Diagnose why audio is not working on a Linux host."""

__version__ = "0.1.0"
