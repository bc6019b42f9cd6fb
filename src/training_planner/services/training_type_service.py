"""Training type listing."""

from typing import List

from ..db.repositories import TrainingTypeRepository
from ..models.training_types import TrainingType


class TrainingTypeService:
    def __init__(self, training_types: TrainingTypeRepository):
        self.training_types = training_types

    def list_training_types(self, include_inactive: bool = False) -> List[TrainingType]:
        """Active training types by default; all of them when asked."""
        return [
            TrainingType.model_validate(row)
            for row in self.training_types.list(include_inactive=include_inactive)
        ]
