from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int] = (100, 300, 500, 800)
    drop_step_score: int = 1

    def score_for_lines(self, lines: int) -> int:
        # Scored once per clear pass; anything outside 1..4 is worth nothing
        if 1 <= lines <= len(self.line_clear_scores):
            return self.line_clear_scores[lines - 1]
        return 0


@dataclass
class Score:
    value: int = 0

    def add(self, points: int) -> None:
        if points < 0:
            raise ValueError("score never decreases")
        self.value += points

    def reset(self) -> None:
        self.value = 0
