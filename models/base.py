from pydantic import BaseModel, ConfigDict, ValidationError
from typing import Any, Optional


class BaseGolfModel(BaseModel):
    """Base for users, rounds and hole scores. Assignments are re-validated."""
    model_config = ConfigDict(validate_assignment=True, str_strip_whitespace=True)

    def update_field(self, field_name: str, value: Any) -> Optional[str]:
        """Set one field. Returns the first validation message instead of raising."""
        try:
            setattr(self, field_name, value)
        except ValidationError as e:
            return e.errors()[0]['msg']
        return None
