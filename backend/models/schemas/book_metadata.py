"""Provider outputs for the capture steps that precede condition grading."""

from pydantic import BaseModel


class CaptureReadiness(BaseModel):
    """Whether a camera frame shows a clear, front-facing book cover."""
    is_ready: bool = False
    degraded: bool = False


class BookMetadata(BaseModel):
    """Title and author read from the cover. Blank when not legible."""
    title: str = ""
    author: str = ""
    degraded: bool = False
