"""Bundled Markdown content shipped as package data."""
