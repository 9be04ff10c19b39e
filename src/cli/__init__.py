"""Comandos de línea de comandos (Typer + Rich)."""
