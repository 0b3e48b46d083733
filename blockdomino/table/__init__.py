"""Table sessions mixing human and automated players."""

from blockdomino.table.session import MatchSession, PendingDecision, DecisionError

__all__ = [
    "MatchSession",
    "PendingDecision",
    "DecisionError",
]
