from typing import List, Optional
from sqlalchemy import create_engine, select, delete
from sqlalchemy import Table, Column, String, BigInteger, JSON, MetaData
from sqlalchemy.engine import Engine
from sqlalchemy.dialects import postgresql, sqlite

from garden_registry.domain.models import Garden
from garden_registry.infrastructure.acl import GardenTranslator


# SQLAlchemy core Table definition
metadata = MetaData()
gardens_table = Table(
    'gardens', metadata,
    Column('id', String, primary_key=True),
    Column('name', String, nullable=False),
    Column('location', String, nullable=False),
    Column('owner', String, nullable=False),
    Column('plants', JSON, nullable=False),
    Column('image', String, nullable=False),
    Column('created_at', BigInteger, nullable=False),
    Column('updated_at', BigInteger, nullable=True),
)

_UPSERT_DIALECTS = {
    'postgresql': postgresql.insert,
    'sqlite': sqlite.insert,
}

class SqlGardenStore:
    """
    Durable ordered map of garden id to Garden, backed by a SQL database.
    Every write replaces the whole record in a single transaction.
    """

    def __init__(self, db_url: Optional[str] = None, engine: Optional[Engine] = None):
        if engine is None:
            if not db_url:
                raise ValueError("Either db_url or engine is required.")
            engine = create_engine(db_url, echo=False)
        self.engine = engine

        dialect = self.engine.dialect.name
        if dialect not in _UPSERT_DIALECTS:
            raise ValueError(f"Unsupported database dialect: {dialect}")
        self._insert = _UPSERT_DIALECTS[dialect]

    def create_tables(self) -> None:
        metadata.create_all(self.engine)

    def get(self, key: str) -> Optional[Garden]:
        with self.engine.connect() as conn:
            row = conn.execute(
                select(gardens_table).where(gardens_table.c.id == key)
            ).mappings().first()
        return GardenTranslator.to_domain(row) if row is not None else None

    def insert(self, key: str, value: Garden) -> Optional[Garden]:
        """
        Inserts or replaces the garden stored under key.

        Returns:
            Optional[Garden]: The garden previously stored under key, if any.
        """
        row = GardenTranslator.to_row(value)
        row['id'] = key

        with self.engine.begin() as conn:
            previous = conn.execute(
                select(gardens_table).where(gardens_table.c.id == key)
            ).mappings().first()

            stmt = self._insert(gardens_table).values(row)
            upsert_stmt = stmt.on_conflict_do_update(
                index_elements=['id'],
                set_={
                    column: stmt.excluded[column]
                    for column in row if column != 'id'
                },
            )
            conn.execute(upsert_stmt)

        return GardenTranslator.to_domain(previous) if previous is not None else None

    def remove(self, key: str) -> Optional[Garden]:
        with self.engine.begin() as conn:
            previous = conn.execute(
                select(gardens_table).where(gardens_table.c.id == key)
            ).mappings().first()
            if previous is None:
                return None
            conn.execute(delete(gardens_table).where(gardens_table.c.id == key))

        return GardenTranslator.to_domain(previous)

    def values(self) -> List[Garden]:
        with self.engine.connect() as conn:
            rows = conn.execute(
                select(gardens_table).order_by(gardens_table.c.id)
            ).mappings().all()
        return [GardenTranslator.to_domain(row) for row in rows]
