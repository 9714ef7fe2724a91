"""Bundled station dataset."""
