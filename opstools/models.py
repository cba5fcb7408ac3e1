"""Document models and the process-wide model registry.

MongoDB operational tools: healthcheck and sample seeding.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Type

from pydantic import BaseModel, ConfigDict, Field
from pymongo.database import Database


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SampleItem(BaseModel):
    """Flat sample record; ``created_at`` is stored as ``createdAt``."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1)
    created_at: datetime = Field(default_factory=_utcnow, alias="createdAt")


class Model:
    """A schema bound to the collection its documents live in."""

    def __init__(self, name: str, schema: Type[BaseModel], collection: str):
        self.name = name
        self.schema = schema
        self.collection = collection

    def validate(self, record: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Validate one record and apply schema defaults.

        Args:
            record: Raw field mapping

        Returns:
            Document ready for insertion, keyed by stored field names

        Raises:
            pydantic.ValidationError: If the record does not match the schema
        """
        return self.schema.model_validate(dict(record)).model_dump(by_alias=True)

    def insert_many(self, db: Database, records: Iterable[Mapping[str, Any]]) -> List[Any]:
        """
        Validate and insert records in order, stopping at the first failure.

        Records ahead of an invalid one are still inserted before the
        validation error propagates. Server-side failures raise
        ``BulkWriteError`` and, since the insert is ordered, leave later
        records unattempted.

        Returns:
            Inserted ``_id`` values in insertion order
        """
        docs = []
        for record in records:
            try:
                docs.append(self.validate(record))
            except Exception:
                self._insert(db, docs)
                raise
        return self._insert(db, docs)

    def _insert(self, db: Database, docs: List[Dict[str, Any]]) -> List[Any]:
        if not docs:
            return []
        result = db[self.collection].insert_many(docs, ordered=True)
        logging.info(f"MongoDB: inserted {len(result.inserted_ids)} documents into {self.collection}")
        return list(result.inserted_ids)


# Process-wide registry keyed by model name
_registry: Dict[str, Model] = {}


def register_model(name: str, schema: Type[BaseModel], collection: str) -> Model:
    """Register a model, or return the one already registered under ``name``."""
    existing = _registry.get(name)
    if existing is not None:
        return existing
    model = Model(name, schema, collection)
    _registry[name] = model
    return model


def get_model(name: str) -> Optional[Model]:
    return _registry.get(name)
