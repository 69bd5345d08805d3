"""Concrete command implementations for the Pomo CLI."""
