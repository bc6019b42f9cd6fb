"""Training type dictionary models."""

from typing import Optional

from pydantic import BaseModel


class TrainingType(BaseModel):
    """An entry of the global training type dictionary (easy, tempo, ...)."""
    code: str
    name: str
    is_active: bool = True
    created_at: Optional[str] = None
