"""Base model class for all n1ql models with serialization support."""

from typing import Any, Dict
from pydantic import BaseModel, ConfigDict


class N1QLBaseModel(BaseModel):
    """Base model for n1ql value objects with built-in serialization."""
    model_config = ConfigDict(validate_assignment=True)

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to a JSON-compatible dictionary.

        Returns:
            Dictionary representation suitable for JSON serialization
        """
        return self.model_dump(mode="json", by_alias=False, exclude_none=True)
