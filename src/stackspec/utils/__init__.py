"""Utility helpers for stackspec."""
