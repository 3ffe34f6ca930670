import logging
from dataclasses import dataclass
from typing import Optional

from gradebook.core.exceptions import ConflictError, NotFoundError, ValidationError
from gradebook.models.grade_column import ColumnStatus, GradeColumn
from gradebook.ports.courses import ICourseRepository
from gradebook.ports.grade_columns import IAssignmentRepository, IGradeColumnRepository
from gradebook.ports.grade_results import IGradeResultRepository
from gradebook.ports.transaction import ITransactionScope
from gradebook.services.weight_validator import MAX_TOTAL_WEIGHT, WeightValidator
from gradebook.utils.helpers import get_utc_now

logger = logging.getLogger(__name__)

_UNSET = object()


@dataclass(frozen=True)
class ColumnSummary:
    course_id: int
    course_name: str
    columns: list
    total_weight: float
    is_weight_complete: bool


def _check_weight(weight_percentage) -> float:
    try:
        weight = float(weight_percentage)
    except (TypeError, ValueError):
        raise ValidationError("weight_percentage must be a number")
    if weight <= 0 or weight > MAX_TOTAL_WEIGHT:
        raise ValidationError("weight_percentage must be greater than 0 and at most 100")
    return weight


def _check_name(name: Optional[str]) -> str:
    if name is None or not name.strip():
        raise ValidationError("column_name is required")
    if len(name.strip()) > 255:
        raise ValidationError("column_name must be at most 255 characters")
    return name.strip()


class GradeColumnService:
    """Weighted grading components of a course"""

    def __init__(
        self,
        courses: ICourseRepository,
        columns: IGradeColumnRepository,
        assignments: IAssignmentRepository,
        results: IGradeResultRepository,
        transaction: ITransactionScope,
        weight_validator: WeightValidator,
    ):
        self.courses = courses
        self.columns = columns
        self.assignments = assignments
        self.results = results
        self.transaction = transaction
        self.weight_validator = weight_validator

    def _require_course(self, course_id: int):
        course = self.courses.get(course_id)
        if not course:
            raise NotFoundError(f"Course {course_id} not found")
        return course

    def _check_order(self, course_id: int, order, exclude_column_id: Optional[int] = None) -> int:
        if isinstance(order, bool) or not isinstance(order, int) or order <= 0:
            raise ValidationError("column_order must be a positive integer")
        if self.columns.order_taken(course_id, order, exclude_column_id):
            raise ValidationError(f"column_order {order} is already used in course {course_id}")
        return order

    def get_column(self, column_id: int, course_id: Optional[int] = None) -> GradeColumn:
        column = self.columns.get(column_id)
        if not column or (course_id is not None and column.course_id != course_id):
            raise NotFoundError(f"Grade column {column_id} not found")
        return column

    def create_column(
        self,
        course_id: int,
        name: str,
        weight_percentage: float,
        order: Optional[int] = None,
        description: Optional[str] = None,
    ) -> GradeColumn:
        name = _check_name(name)
        weight = _check_weight(weight_percentage)

        with self.transaction.scope():
            self._require_course(course_id)
            if order is None:
                order = self.columns.max_order(course_id) + 1
            order = self._check_order(course_id, order)

            check = self.weight_validator.validate_weight_total(course_id)
            if not check.fits(weight):
                raise ValidationError(
                    f"Total weight would exceed 100%: current {check.current_total}%, adding {weight}%"
                )

            column = self.columns.add(GradeColumn(
                course_id=course_id,
                column_name=name,
                weight_percentage=weight,
                column_order=order,
                description=description,
                status=ColumnStatus.ACTIVE,
            ))
            # New weight changes every process average of the course
            self.results.mark_stale(course_id)

        logger.info("Created grade column %s (%s, %s%%) in course %s", column.id, name, weight, course_id)
        return column

    def list_columns(self, course_id: int, include_inactive: bool = False) -> list[GradeColumn]:
        self._require_course(course_id)
        return self.columns.list_for_course(course_id, include_inactive)

    def column_summary(self, course_id: int, include_inactive: bool = False) -> ColumnSummary:
        course = self._require_course(course_id)
        columns = self.columns.list_for_course(course_id, include_inactive)
        total = self.weight_validator.validate_weight_total(course_id).current_total
        return ColumnSummary(
            course_id=course.id,
            course_name=course.name,
            columns=columns,
            total_weight=total,
            is_weight_complete=abs(total - MAX_TOTAL_WEIGHT) < 0.001,
        )

    def update_column(
        self,
        column_id: int,
        course_id: Optional[int] = None,
        name=_UNSET,
        weight_percentage=_UNSET,
        order=_UNSET,
        description=_UNSET,
    ) -> GradeColumn:
        with self.transaction.scope():
            column = self.get_column(column_id, course_id)

            if name is not _UNSET:
                column.column_name = _check_name(name)
            if weight_percentage is not _UNSET:
                weight = _check_weight(weight_percentage)
                if column.is_active:
                    check = self.weight_validator.validate_weight_total(column.course_id, exclude_column_id=column.id)
                    if not check.fits(weight):
                        raise ValidationError(
                            "Total weight would exceed 100%: "
                            f"current without this column {check.current_total}%, setting {weight}%"
                        )
                column.weight_percentage = weight
            if order is not _UNSET:
                column.column_order = self._check_order(column.course_id, order, exclude_column_id=column.id)
            if description is not _UNSET:
                column.description = description

            column.updated_at = get_utc_now()
            self.results.mark_stale(column.course_id)

        logger.info("Updated grade column %s", column.id)
        return column

    def deactivate_column(self, column_id: int, course_id: Optional[int] = None) -> GradeColumn:
        with self.transaction.scope():
            column = self.get_column(column_id, course_id)
            if column.status == ColumnStatus.DEACTIVATED:
                return column
            column.status = ColumnStatus.DEACTIVATED
            column.updated_at = get_utc_now()
            self.results.mark_stale(column.course_id)

        logger.info("Deactivated grade column %s of course %s", column.id, column.course_id)
        return column

    def delete_column(self, column_id: int, course_id: Optional[int] = None) -> None:
        with self.transaction.scope():
            column = self.get_column(column_id, course_id)
            if self.assignments.quiz_ids_for_column(column.id):
                raise ConflictError(
                    f"Grade column {column.id} still has quizzes assigned; unassign them before deleting"
                )
            owner_course_id = column.course_id
            self.columns.delete(column)
            self.results.mark_stale(owner_course_id)

        logger.info("Deleted grade column %s of course %s", column_id, owner_course_id)
