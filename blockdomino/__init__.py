"""Block Domino: rules engine, automated players, and table sessions."""

__version__ = "0.1.0"
