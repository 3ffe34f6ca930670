"""
Pure grading rules

Everything here is side-effect free so that the aggregation can be
checked without a database: letter boundaries, the process average
and the process/final-exam blend.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from gradebook.core.config.settings import get_settings
from gradebook.core.exceptions import ValidationError
from gradebook.utils.helpers import round_score

# (lower bound inclusive, letter), best first, on the 0-10 scale
GRADE_BOUNDARIES: tuple[tuple[float, str], ...] = (
    (9.0, "A+"),
    (8.5, "A"),
    (8.0, "B+"),
    (7.0, "B"),
    (6.5, "C+"),
    (5.5, "C"),
    (5.0, "D+"),
    (4.0, "D"),
)
FAILING_GRADE = "F"

# Best to worst, used to compare letters
GRADE_ORDER: tuple[str, ...] = tuple(letter for _, letter in GRADE_BOUNDARIES) + (FAILING_GRADE,)


def grade_letter(score: float) -> str:
    for lower_bound, letter in GRADE_BOUNDARIES:
        if score >= lower_bound:
            return letter
    return FAILING_GRADE


@dataclass(frozen=True)
class GradeConfig:
    process_weight: float
    final_exam_weight: float

    @classmethod
    def default(cls) -> "GradeConfig":
        settings = get_settings()
        return cls(settings.DEFAULT_PROCESS_WEIGHT, settings.DEFAULT_FINAL_EXAM_WEIGHT)

    @classmethod
    def from_json(cls, raw: Optional[dict]) -> "GradeConfig":
        """
        Course.grade_config column value.

        Unset or partial configs fall back to the whole default split, never
        half of it; a complete config must still add up to 100.
        """
        if not raw or "process_weight" not in raw or "final_exam_weight" not in raw:
            return cls.default()
        return cls(float(raw["process_weight"]), float(raw["final_exam_weight"])).validate()

    def validate(self) -> "GradeConfig":
        for name, weight in (("process_weight", self.process_weight), ("final_exam_weight", self.final_exam_weight)):
            if weight < 0 or weight > 100:
                raise ValidationError(f"{name} must be between 0 and 100, got {weight}")
        if abs(self.process_weight + self.final_exam_weight - 100) > 0.001:
            raise ValidationError(
                "process_weight and final_exam_weight must add up to 100, "
                f"got {self.process_weight + self.final_exam_weight}"
            )
        return self

    def to_json(self) -> dict:
        return {"process_weight": self.process_weight, "final_exam_weight": self.final_exam_weight}


def process_average(weighted_averages: Iterable[tuple[Optional[float], float]]) -> Optional[float]:
    """
    Weighted blend of column averages.

    Each item is (column average, column weight percentage). Columns without
    an average are skipped and the remaining weights are NOT renormalised,
    so a student who has only attempted a 40% column is graded on 40% of
    the nominal scale. Returns None when no column has an average.
    """
    total = None
    for average, weight in weighted_averages:
        if average is None:
            continue
        total = (total or 0.0) + average * weight / 100
    return round_score(total)


def total_score(process_avg: Optional[float], final_exam_score: Optional[float], config: GradeConfig) -> Optional[float]:
    if process_avg is None or final_exam_score is None:
        return None
    return round_score(
        process_avg * config.process_weight / 100 + final_exam_score * config.final_exam_weight / 100
    )


def grade_for_total(total: Optional[float]) -> Optional[str]:
    return grade_letter(total) if total is not None else None
