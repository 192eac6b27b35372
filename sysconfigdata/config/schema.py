"""Configuration schema definitions using Pydantic for validation.

Parsing options are grouped in a single ``ParserConfig`` model so that
configuration errors are caught early with clear error messages.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from sysconfigdata.parsers.normalizer import DEFAULT_LIST_KEYS
from sysconfigdata.parsers.tokens import DEFAULT_CONTAINER
from sysconfigdata.resolver import MissingKeyPolicy


class ParserConfig(BaseModel):
    """Options controlling tokenization, normalization and resolution.

    Attributes:
        container_name: Variable holding the dictionary literal; None accepts
            any single top-level dictionary assignment.
        list_keys: fnmatch patterns (case-sensitive) of list-typed keys.
        missing_key_policy: Handling of placeholders naming undefined keys.
    """

    container_name: Optional[str] = DEFAULT_CONTAINER
    list_keys: List[str] = Field(default_factory=lambda: list(DEFAULT_LIST_KEYS))
    missing_key_policy: MissingKeyPolicy = MissingKeyPolicy.ERROR

    model_config = {"extra": "forbid"}

    @field_validator("container_name")
    @classmethod
    def validate_container_name(cls, v: Optional[str]) -> Optional[str]:
        """Validate that the container name is a plain identifier."""
        if v is not None and not v.isidentifier():
            raise ValueError(f"Invalid container name '{v}'")
        return v

    @field_validator("list_keys")
    @classmethod
    def validate_list_keys(cls, v: List[str]) -> List[str]:
        """Validate that list key patterns are non-empty strings."""
        for pattern in v:
            if not pattern or not pattern.strip():
                raise ValueError("list_keys patterns must be non-empty")
        return v

    @classmethod
    def default(cls) -> "ParserConfig":
        return cls()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from dictionary.

        Raises:
            ValidationError: If configuration is invalid.
        """
        return cls.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")
