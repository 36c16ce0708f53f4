import logging
from typing import Any, Callable, List, Mapping, Optional, Protocol, Tuple, Union

from pydantic import ValidationError as PydanticValidationError

from garden_registry.domain.exceptions import (
    AuthorizationError,
    DuplicateError,
    GardenRegistryException,
    NotFoundError,
    NotFoundInListError,
    StoreReadError,
    StoreWriteError,
    ValidationError,
)
from garden_registry.domain.models import Garden, GardenPayload
from garden_registry.domain.result import Result
from garden_registry.infrastructure.runtime import new_garden_id

logger = logging.getLogger(__name__)

PayloadLike = Union[GardenPayload, Mapping[str, Any]]


class GardenStore(Protocol):
    def get(self, key: str) -> Optional[Garden]: ...
    def insert(self, key: str, value: Garden) -> Optional[Garden]: ...
    def remove(self, key: str) -> Optional[Garden]: ...
    def values(self) -> List[Garden]: ...


class GardenRegistry:
    """
    Create, read, update, delete and plant-list operations over gardens kept in a single store.

    Each operation is one read-modify-write against the store and returns a
    Result; domain failures and store failures come back as error values.
    The host is expected to serialize mutating calls, so no locking is done here.

    Ownership is checked on delete, add_plant and remove_plant only. update and
    update_image let any caller overwrite a garden's content.
    """

    def __init__(
            self,
            store: GardenStore,
            identity: Callable[[], Any],
            clock: Callable[[], int],
            id_factory: Callable[[], str] = new_garden_id,
    ):
        self.store = store
        self.identity = identity
        self.clock = clock
        self.id_factory = id_factory

    # Operations

    def create(self, payload: PayloadLike) -> Result[Garden]:
        def op() -> Garden:
            content = self._require_payload(payload)
            garden = Garden(
                id=self.id_factory(),
                name=content.name,
                location=content.location,
                owner=self._caller(),
                plants=content.plants,
                image=content.image,
                created_at=self.clock(),
                updated_at=None,
            )
            self._write(garden, "Error occurred during garden insertion")
            logger.info(f"Created garden {garden.id} owned by {garden.owner}.")
            return garden

        return self._run("create", op)

    def get(self, garden_id: str) -> Result[Garden]:
        def op() -> Garden:
            self._require_id(garden_id, f"Invalid id={garden_id}.")
            return self._load(garden_id)

        return self._run("get", op)

    def list_all(self) -> Result[List[Garden]]:
        def op() -> List[Garden]:
            try:
                return list(self.store.values())
            except Exception as e:
                logger.error(f"Store scan failed: {e}")
                raise StoreReadError(f"Failed to get all gardens: {e}")

        return self._run("list_all", op)

    def update(self, garden_id: str, payload: PayloadLike) -> Result[Garden]:
        def op() -> Garden:
            self._require_id(garden_id, "Invalid id.")
            content = self._require_payload(payload)
            existing = self._load(garden_id)

            updated = existing.model_copy(update={
                'name': content.name,
                'location': content.location,
                'plants': content.plants,
                'image': content.image,
                'updated_at': self._mutation_time(existing),
            })
            self._write(updated, "Error updating garden")
            logger.info(f"Updated garden {garden_id}.")
            return updated

        return self._run("update", op)

    def delete(self, garden_id: str) -> Result[Garden]:
        def op() -> Garden:
            self._require_id(garden_id, f"Invalid id={garden_id}.")
            existing = self._load(garden_id)
            self._require_owner(existing, "User does not have the right to delete the garden")

            try:
                self.store.remove(garden_id)
            except Exception as e:
                logger.error(f"Store remove failed for {garden_id}: {e}")
                raise StoreWriteError(f"Error deleting garden with id={garden_id}: {e}", garden_id)

            logger.info(f"Deleted garden {garden_id}.")
            return existing

        return self._run("delete", op)

    def add_plant(self, garden_id: str, plant: str) -> Result[Garden]:
        def op() -> Garden:
            self._require_id(garden_id, "Invalid gardenId.")
            if not plant:
                raise ValidationError("Missing plant parameter.", garden_id)

            garden = self._load(garden_id)
            if plant in garden.plants:
                raise DuplicateError(plant, garden_id)
            self._require_owner(garden, "User does not have the right to add a plant to the garden")

            updated = garden.model_copy(update={
                'plants': garden.plants + (plant,),
                'updated_at': self._mutation_time(garden),
            })
            self._write(updated, "Error adding plant to garden")
            logger.info(f"Added plant '{plant}' to garden {garden_id}.")
            return updated

        return self._run("add_plant", op)

    def remove_plant(self, garden_id: str, plant: str) -> Result[Garden]:
        def op() -> Garden:
            self._require_id(garden_id, "Invalid gardenId.")
            if not plant:
                raise ValidationError("Missing plant parameter.", garden_id)

            garden = self._load(garden_id)
            if plant not in garden.plants:
                raise NotFoundInListError(plant, garden_id)
            self._require_owner(garden, "User does not have the right to remove a plant from the garden")

            plants = list(garden.plants)
            plants.remove(plant)
            updated = garden.model_copy(update={
                'plants': tuple(plants),
                'updated_at': self._mutation_time(garden),
            })
            self._write(updated, "Error removing plant from garden")
            logger.info(f"Removed plant '{plant}' from garden {garden_id}.")
            return updated

        return self._run("remove_plant", op)

    def list_plants(self, garden_id: str) -> Result[Tuple[str, ...]]:
        def op() -> Tuple[str, ...]:
            self._require_id(garden_id, "Invalid gardenId.")
            return self._load(garden_id).plants

        return self._run("list_plants", op)

    def update_image(self, garden_id: str, new_image: str) -> Result[Garden]:
        def op() -> Garden:
            if not isinstance(new_image, str):
                raise ValidationError("Invalid image.", garden_id)
            garden = self._load(garden_id)
            updated = garden.model_copy(update={
                'image': new_image,
                'updated_at': self._mutation_time(garden),
            })
            self._write(updated, "Error updating garden image")
            logger.info(f"Updated image of garden {garden_id}.")
            return updated

        return self._run("update_image", op)

    # Helpers

    def _run(self, operation: str, op: Callable[[], Any]) -> Result:
        try:
            return Result.success(op())
        except GardenRegistryException as e:
            logger.warning(f"{operation} failed with {e.kind}: {e.message}")
            return Result.failure(e)
        except PydanticValidationError as e:
            logger.warning(f"{operation} failed building a garden: {e.error_count()} field error(s)")
            return Result.failure(ValidationError(f"Invalid garden record: {e.error_count()} field error(s)."))

    @staticmethod
    def _require_id(garden_id: str, message: str) -> None:
        if not garden_id:
            raise ValidationError(message)

    @staticmethod
    def _require_payload(payload: PayloadLike) -> GardenPayload:
        if payload is None:
            raise ValidationError("Missing required fields in payload.")

        if not isinstance(payload, GardenPayload):
            try:
                payload = GardenPayload.model_validate(payload)
            except PydanticValidationError as e:
                raise ValidationError(f"Invalid payload: {e.error_count()} field error(s).")

        # An empty plant list is accepted; only a missing one is rejected.
        if not payload.name or not payload.location or payload.plants is None or not payload.image:
            raise ValidationError("Missing required fields in payload.")
        return payload

    def _caller(self) -> str:
        # Tokens are stored and compared in their string form.
        return str(self.identity())

    def _require_owner(self, garden: Garden, message: str) -> None:
        if garden.owner != self._caller():
            raise AuthorizationError(message, garden.id)

    def _load(self, garden_id: str) -> Garden:
        try:
            garden = self.store.get(garden_id)
        except Exception as e:
            logger.error(f"Store read failed for {garden_id}: {e}")
            raise StoreReadError(f"Error while retrieving garden with id {garden_id}: {e}", garden_id)

        if garden is None:
            raise NotFoundError(f"Garden with id={garden_id} not found.", garden_id)
        return garden

    def _write(self, garden: Garden, message: str) -> None:
        try:
            self.store.insert(garden.id, garden)
        except Exception as e:
            logger.error(f"Store write failed for {garden.id}: {e}")
            raise StoreWriteError(f"{message}: {e}", garden.id)

    def _mutation_time(self, garden: Garden) -> int:
        return max(self.clock(), garden.created_at)
