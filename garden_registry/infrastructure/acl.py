from typing import Any, Dict, Mapping
from garden_registry.domain.models import Garden

class GardenTranslator:
    """
    Anti-corruption layer that translates database rows into Garden instances and back.
    """

    @staticmethod
    def to_domain(row: Mapping[str, Any]) -> Garden:
        """
        Transforms a row of the gardens table into a Garden.

        Args:
            row (Mapping[str, Any]): Column name to value mapping, as returned by a SQLAlchemy result.

        Returns:
            Garden: The domain model instance representing the garden.
        """
        created_at = row.get('created_at')
        if created_at is None:
            raise ValueError("created_at is required to build Garden.")

        return Garden(
            id=row.get('id', ''),
            name=row.get('name', ''),
            location=row.get('location', ''),
            owner=row.get('owner', ''),
            plants=tuple(row.get('plants') or ()),
            image=row.get('image', ''),
            created_at=created_at,
            updated_at=row.get('updated_at'),
        )

    @staticmethod
    def to_row(garden: Garden) -> Dict[str, Any]:
        return {
            'id': garden.id,
            'name': garden.name,
            'location': garden.location,
            'owner': garden.owner,
            'plants': list(garden.plants),
            'image': garden.image,
            'created_at': garden.created_at,
            'updated_at': garden.updated_at,
        }
