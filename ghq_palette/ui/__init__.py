"""Textual screens and widgets for ghq-palette."""
