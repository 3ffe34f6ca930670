import logging

from gradebook.core.exceptions import NotFoundError
from gradebook.ports.courses import ICourseRepository
from gradebook.ports.grade_results import IGradeResultRepository
from gradebook.ports.transaction import ITransactionScope
from gradebook.services.grading import GradeConfig

logger = logging.getLogger(__name__)


class GradeConfigService:
    """Process / final exam split of a course"""

    def __init__(self, courses: ICourseRepository, results: IGradeResultRepository, transaction: ITransactionScope):
        self.courses = courses
        self.results = results
        self.transaction = transaction

    def get_grade_config(self, course_id: int) -> GradeConfig:
        course = self.courses.get(course_id)
        if not course:
            raise NotFoundError(f"Course {course_id} not found")
        return GradeConfig.from_json(course.grade_config)

    def update_grade_config(self, course_id: int, process_weight: float, final_exam_weight: float) -> GradeConfig:
        config = GradeConfig(float(process_weight), float(final_exam_weight)).validate()

        with self.transaction.scope():
            course = self.courses.get(course_id)
            if not course:
                raise NotFoundError(f"Course {course_id} not found")
            self.courses.set_grade_config(course, config.to_json())
            self.results.mark_stale(course_id)

        logger.info(
            "Grade config of course %s set to process=%s final_exam=%s",
            course_id, config.process_weight, config.final_exam_weight,
        )
        return config
