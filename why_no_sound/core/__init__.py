"""Core utilities: logging and command execution."""
