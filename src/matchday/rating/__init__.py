"""Elo-style rating updates offered alongside the engine."""

from matchday.rating.elo import EloResult, apply_elo_update, expected_score, k_factor

__all__ = ["EloResult", "apply_elo_update", "expected_score", "k_factor"]
