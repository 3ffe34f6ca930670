from sqlalchemy import Column, Integer, String, ForeignKey, Float, DateTime, JSON, Enum, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
import enum
from gradebook.db.base import Base

class ResultStatus(enum.Enum):
    COMPUTED = "computed"
    STALE = "stale"

class GradeResult(Base):
    __tablename__ = "course_grade_results"
    __table_args__ = (
        UniqueConstraint("course_id", "user_id", name="uq_grade_result_course_user"),
    )

    id = Column(Integer, primary_key=True)
    course_id = Column(Integer, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # str(column_id) -> average score, or None when the column has no attempts yet
    column_scores = Column(JSON, nullable=False, default=dict)
    process_average = Column(Float, nullable=True)
    final_exam_score = Column(Float, nullable=True)
    total_score = Column(Float, nullable=True)
    grade = Column(String(10), nullable=True)
    status = Column(Enum(ResultStatus), nullable=False, default=ResultStatus.COMPUTED)
    calculated_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    last_updated = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    course = relationship("Course", back_populates="grade_results")
    student = relationship("User", back_populates="grade_results")
    history = relationship(
        "GradeResultHistory",
        back_populates="result",
        cascade="all, delete-orphan",
        order_by="GradeResultHistory.id",
    )

class GradeResultHistory(Base):
    __tablename__ = "course_grade_result_histories"
    id = Column(Integer, primary_key=True)
    result_id = Column(Integer, ForeignKey("course_grade_results.id", ondelete="CASCADE"), nullable=False, index=True)
    snapshot = Column(JSON, nullable=False)
    changed_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    result = relationship("GradeResult", back_populates="history")
