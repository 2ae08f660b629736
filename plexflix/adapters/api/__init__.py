"""Clients API externes."""
