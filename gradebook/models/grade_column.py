from sqlalchemy import Column, Integer, String, ForeignKey, Float, DateTime, Text, Enum, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
import enum
from gradebook.db.base import Base

class ColumnStatus(enum.Enum):
    ACTIVE = "active"
    DEACTIVATED = "deactivated"

class GradeColumn(Base):
    __tablename__ = "course_grade_columns"
    __table_args__ = (
        UniqueConstraint("course_id", "column_order", name="uq_grade_column_course_order"),
    )

    id = Column(Integer, primary_key=True)
    course_id = Column(Integer, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)
    column_name = Column(String(255), nullable=False)
    weight_percentage = Column(Float, nullable=False)
    column_order = Column(Integer, nullable=False, default=1)
    description = Column(Text, nullable=True)
    status = Column(Enum(ColumnStatus), nullable=False, default=ColumnStatus.ACTIVE)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    course = relationship("Course", back_populates="grade_columns")
    assignments = relationship("ColumnQuizAssignment", back_populates="column", cascade="all, delete-orphan")

    @property
    def is_active(self) -> bool:
        return self.status == ColumnStatus.ACTIVE

class ColumnQuizAssignment(Base):
    __tablename__ = "course_grade_column_quizzes"
    __table_args__ = (
        UniqueConstraint("column_id", "quiz_id", name="uq_grade_column_quiz"),
    )

    id = Column(Integer, primary_key=True)
    column_id = Column(Integer, ForeignKey("course_grade_columns.id", ondelete="CASCADE"), nullable=False, index=True)
    # A quiz counts towards at most one column
    quiz_id = Column(Integer, ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False, unique=True)
    weight_percentage = Column(Float, nullable=True)
    assigned_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    assigned_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    column = relationship("GradeColumn", back_populates="assignments")
    quiz = relationship("Quiz", back_populates="assignment")
    assigner = relationship("User", foreign_keys=[assigned_by])
