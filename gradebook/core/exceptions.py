from fastapi import status


class GradebookError(Exception):
    """Base class for business-rule failures raised by the grading services."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(GradebookError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(GradebookError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(GradebookError):
    status_code = status.HTTP_409_CONFLICT


class CrossCourseError(ValidationError):
    """A quiz and a grade column belong to different courses."""
