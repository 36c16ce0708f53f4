from typing import Optional, Tuple
from pydantic import BaseModel, Field, ConfigDict

class GardenPayload(BaseModel):
    """
    Caller-supplied content of a garden, used by create and update.

    Every field is optional so that a missing field can be told apart from an
    empty one; the registry decides which of the two it rejects.
    """
    model_config = ConfigDict(extra='ignore')

    name: Optional[str] = Field(None, description="Display name of the garden")
    location: Optional[str] = Field(None, description="Where the garden is")
    plants: Optional[Tuple[str, ...]] = Field(None, description="Plant names, in order")
    image: Optional[str] = Field(None, description="Image URI or encoded reference")


class Garden(BaseModel):
    """
    Immutable domain model representing a garden record.
    Mutations build a new instance with model_copy and persist it whole.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., description="Opaque identifier assigned at creation")
    name: str = Field(..., description="Display name of the garden")
    location: str = Field(..., description="Where the garden is")
    owner: str = Field(..., description="Identity token of the creator")
    plants: Tuple[str, ...] = Field(default_factory=tuple, description="Plant names, in order")
    image: str = Field(..., description="Image URI or encoded reference")
    created_at: int = Field(..., ge=0, alias="createdAt", description="Creation time in nanoseconds")
    updated_at: Optional[int] = Field(
        None,
        ge=0,
        alias="updatedAt",
        description="Time of the most recent mutation in nanoseconds, absent until the first one"
    )
