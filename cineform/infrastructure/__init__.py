"""Couche infrastructure : persistance documentaire SQLite."""
