import io
import logging
from dataclasses import dataclass

import pandas as pd

from gradebook.core.exceptions import NotFoundError, ValidationError
from gradebook.ports.courses import ICourseRepository
from gradebook.ports.grade_columns import IGradeColumnRepository
from gradebook.ports.grade_results import IGradeResultRepository
from gradebook.utils.helpers import get_utc_now

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("json", "csv", "excel")

SUMMARY_FIELDS = ["process_average", "final_exam_score", "total_score", "grade"]


@dataclass
class ExportFile:
    content: bytes
    media_type: str
    filename: str


class ResultExporter:
    """Course grade results as one row per student"""

    def __init__(self, courses: ICourseRepository, columns: IGradeColumnRepository, results: IGradeResultRepository):
        self.courses = courses
        self.columns = columns
        self.results = results

    def _collect(self, course_id: int):
        course = self.courses.get(course_id)
        if not course:
            raise NotFoundError(f"Course {course_id} not found")
        results = self.results.list_for_course(course_id)
        if not results:
            raise NotFoundError(f"Course {course_id} has no grade results; calculate grades before exporting")

        columns = self.columns.list_for_course(course_id)
        rows = []
        for result in results:
            scores = result.column_scores or {}
            row = {
                "student_id": result.user_id,
                "student_name": result.student.name,
                "email": result.student.email,
            }
            for column in columns:
                row[f"column_{column.id}"] = scores.get(str(column.id))
            for field in SUMMARY_FIELDS:
                row[field] = getattr(result, field)
            rows.append(row)
        return course, columns, rows

    def export_json(self, course_id: int) -> dict:
        course, columns, rows = self._collect(course_id)
        return {
            "metadata": {
                "course_id": course.id,
                "course_name": course.name,
                "export_date": get_utc_now().isoformat(),
                "total_students": len(rows),
                "grade_columns": [
                    {
                        "column_id": column.id,
                        "column_name": column.column_name,
                        "weight_percentage": column.weight_percentage,
                        "column_order": column.column_order,
                    }
                    for column in columns
                ],
            },
            "data": rows,
        }

    def _frame(self, columns, rows) -> pd.DataFrame:
        headers = ["student_id", "student_name", "email"]
        headers += [f"column_{column.id}" for column in columns]
        headers += SUMMARY_FIELDS
        frame = pd.DataFrame(rows, columns=headers)
        # Column ids keep headers unique when names repeat or shadow a summary field
        return frame.rename(
            columns={f"column_{column.id}": f"{column.column_name} ({column.id})" for column in columns}
        )

    def export_csv(self, course_id: int) -> ExportFile:
        course, columns, rows = self._collect(course_id)
        content = self._frame(columns, rows).to_csv(index=False).encode("utf-8")
        return ExportFile(content, "text/csv", f"course_{course.id}_results.csv")

    def export_excel(self, course_id: int) -> ExportFile:
        course, columns, rows = self._collect(course_id)
        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            self._frame(columns, rows).to_excel(writer, sheet_name="Results", index=False)
            pd.DataFrame(
                [
                    {
                        "column_name": column.column_name,
                        "weight_percentage": column.weight_percentage,
                        "column_order": column.column_order,
                    }
                    for column in columns
                ],
                columns=["column_name", "weight_percentage", "column_order"],
            ).to_excel(writer, sheet_name="Grade columns", index=False)
        return ExportFile(
            buffer.getvalue(),
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            f"course_{course.id}_results.xlsx",
        )

    def export_course_results(self, course_id: int, fmt: str = "json"):
        if fmt not in EXPORT_FORMATS:
            raise ValidationError(f"Unsupported export format {fmt!r}, expected one of {', '.join(EXPORT_FORMATS)}")
        logger.info("Exporting results of course %s as %s", course_id, fmt)
        if fmt == "csv":
            return self.export_csv(course_id)
        if fmt == "excel":
            return self.export_excel(course_id)
        return self.export_json(course_id)
