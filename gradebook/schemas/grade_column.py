from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, List
from gradebook.models.grade_column import ColumnStatus

class GradeColumnCreate(BaseModel):
    column_name: str
    weight_percentage: float
    column_order: Optional[int] = None
    description: Optional[str] = None

class GradeColumnUpdate(BaseModel):
    column_name: Optional[str] = None
    weight_percentage: Optional[float] = None
    column_order: Optional[int] = None
    description: Optional[str] = None

class GradeColumnResponse(BaseModel):
    id: int
    course_id: int
    column_name: str
    weight_percentage: float
    column_order: int
    description: Optional[str] = None
    status: ColumnStatus
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class GradeColumnSummary(BaseModel):
    course_id: int
    course_name: str
    columns: List[GradeColumnResponse]
    total_weight: float
    is_weight_complete: bool

    class Config:
        from_attributes = True

class QuizAssignmentItem(BaseModel):
    quiz_id: int
    weight_percentage: Optional[float] = Field(default=None, gt=0, le=100)

class QuizAssignmentRequest(BaseModel):
    quiz_assignments: List[QuizAssignmentItem] = Field(..., min_length=1)
    assigned_by: Optional[int] = None
    replace: bool = False

class QuizAssignmentResponse(BaseModel):
    id: int
    column_id: int
    quiz_id: int
    weight_percentage: Optional[float] = None
    assigned_by: Optional[int] = None
    assigned_at: datetime

    class Config:
        from_attributes = True

class QuizSummary(BaseModel):
    id: int
    course_id: int
    name: str

    class Config:
        from_attributes = True
