"""Rendering helpers for the terminal front-end."""
