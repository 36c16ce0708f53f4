from typing import Any, Dict, Generic, Optional, TypeVar
from pydantic import BaseModel, ConfigDict, model_validator

from garden_registry.domain.exceptions import GardenRegistryException

T = TypeVar("T")

class Result(BaseModel, Generic[T]):
    """
    Outcome of a registry operation: either a value or one of the named errors.
    Registry operations never raise; callers inspect `ok` or call `unwrap()`.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    value: Optional[T] = None
    error: Optional[GardenRegistryException] = None

    @model_validator(mode="after")
    def _one_outcome(self) -> "Result[T]":
        if self.error is not None and self.value is not None:
            raise ValueError("A result carries either a value or an error, not both.")
        return self

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: GardenRegistryException) -> "Result[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value

    def to_dict(self) -> Dict[str, Any]:
        """Tagged, JSON-ready form of the result."""
        if self.error is not None:
            return {
                "ok": False,
                "error": {"kind": self.error.kind, "message": self.error.message},
            }

        value = self.value
        if isinstance(value, BaseModel):
            value = value.model_dump(mode="json", by_alias=True)
        elif isinstance(value, (list, tuple)):
            value = [
                v.model_dump(mode="json", by_alias=True) if isinstance(v, BaseModel) else v
                for v in value
            ]
        return {"ok": True, "value": value}
