from typing import Optional

from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import flag_modified

from gradebook.models.course import Course, course_students
from gradebook.models.user import User
from gradebook.ports.courses import ICourseRepository, IUserRepository


class CourseRepository(ICourseRepository):
    def __init__(self, db: Session):
        self.db = db

    def get(self, course_id: int) -> Optional[Course]:
        return self.db.query(Course).filter(Course.id == course_id).first()

    def list_students(self, course_id: int) -> list[User]:
        return (
            self.db.query(User)
            .join(course_students, course_students.c.user_id == User.id)
            .filter(course_students.c.course_id == course_id)
            .order_by(User.name.asc(), User.id.asc())
            .all()
        )

    def set_grade_config(self, course: Course, config: dict) -> Course:
        course.grade_config = dict(config)
        flag_modified(course, "grade_config")
        self.db.flush()
        return course


class UserRepository(IUserRepository):
    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()
