"""Automated player strategies."""
