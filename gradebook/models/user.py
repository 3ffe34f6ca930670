from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from gradebook.db.base import Base
from gradebook.models.course import course_students

class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True)

    courses = relationship("Course", secondary=course_students, back_populates="students")
    quiz_results = relationship("QuizResult", back_populates="user", cascade="all, delete-orphan")
    grade_results = relationship("GradeResult", back_populates="student", cascade="all, delete-orphan")
