from dataclasses import dataclass
from typing import Optional

from gradebook.ports.grade_columns import IGradeColumnRepository

MAX_TOTAL_WEIGHT = 100.0


@dataclass(frozen=True)
class WeightCheck:
    is_valid: bool
    current_total: float

    def fits(self, extra_weight: float) -> bool:
        """Whether adding extra_weight keeps the total at or below 100"""
        return round(self.current_total + extra_weight, 2) <= MAX_TOTAL_WEIGHT


class WeightValidator:
    def __init__(self, columns: IGradeColumnRepository):
        self.columns = columns

    def validate_weight_total(self, course_id: int, exclude_column_id: Optional[int] = None) -> WeightCheck:
        """Sum of active column weights of a course, optionally leaving one column out"""
        current_total = round(sum(self.columns.active_weights(course_id, exclude_column_id)), 2)
        return WeightCheck(is_valid=current_total <= MAX_TOTAL_WEIGHT, current_total=current_total)
