from sqlalchemy import Column, Integer, String, ForeignKey, Table, JSON
from sqlalchemy.orm import relationship
from gradebook.db.base import Base

# Association tables
course_students = Table(
    "course_students", Base.metadata,
    Column("course_id", Integer, ForeignKey("courses.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
)

class Course(Base):
    __tablename__ = "courses"
    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    # {"process_weight": 50, "final_exam_weight": 50}; null means the default split
    grade_config = Column(JSON, nullable=True)

    students = relationship("User", secondary=course_students, back_populates="courses")
    quizzes = relationship("Quiz", back_populates="course", cascade="all, delete-orphan")
    grade_columns = relationship(
        "GradeColumn",
        back_populates="course",
        cascade="all, delete-orphan",
        order_by="GradeColumn.column_order",
    )
    grade_results = relationship("GradeResult", back_populates="course", cascade="all, delete-orphan")
