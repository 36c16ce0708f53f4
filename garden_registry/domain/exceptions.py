from typing import Optional


class GardenRegistryException(Exception):
    """Base exception for all garden registry errors."""
    def __init__(self, message: str, garden_id: Optional[str] = None):
        self.message = message
        self.garden_id = garden_id
        super().__init__(message)

    @property
    def kind(self) -> str:
        return type(self).__name__

class ValidationError(GardenRegistryException):
    """Raised when a required argument or payload field is missing."""
    pass

class NotFoundError(GardenRegistryException):
    """Raised when no garden exists for the given id."""
    pass

class NotFoundInListError(GardenRegistryException):
    """Raised when removing a plant that is not in the garden."""
    def __init__(self, plant: str, garden_id: str):
        self.plant = plant
        super().__init__(f"Plant '{plant}' is not in the garden.", garden_id)

class DuplicateError(GardenRegistryException):
    """Raised when adding a plant that is already in the garden."""
    def __init__(self, plant: str, garden_id: str):
        self.plant = plant
        super().__init__(f"Plant '{plant}' is already in the garden.", garden_id)

class AuthorizationError(GardenRegistryException):
    """Raised when the caller is not the owner of the garden."""
    pass

class DatabaseException(GardenRegistryException):
    """Raised when a store operation fails."""
    pass

class StoreReadError(DatabaseException):
    pass

class StoreWriteError(DatabaseException):
    pass
