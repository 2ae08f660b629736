"""Acces aux secrets chiffres."""
