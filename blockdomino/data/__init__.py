"""Agents and game simulation."""
