"""Utility helpers for dockrun."""
