"""
Base repository interface for data access layer.
This follows the Repository pattern to separate business logic from data access.

Repositories only flush. Services own the transaction and commit once per
operation, so compound changes land together or not at all.
"""

from typing import Generic, TypeVar, Optional, Type
from sqlalchemy.orm import Session
from abc import ABC

ModelType = TypeVar("ModelType")


class BaseRepository(Generic[ModelType], ABC):
    """
    Base repository providing common CRUD operations.
    All repositories should inherit from this class.
    """

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    def get_by_id(self, entity_id: int) -> Optional[ModelType]:
        """
        Get entity by primary key.

        Args:
            entity_id: Integer primary key

        Returns:
            Entity or None if not found
        """
        return self.db.get(self.model, entity_id)

    def add(self, entity: ModelType) -> ModelType:
        """Stage a new entity and flush so its id is assigned"""
        self.db.add(entity)
        self.db.flush()
        return entity

    def update(self, entity: ModelType, **values) -> ModelType:
        """Apply the given column values to an existing entity"""
        for key, value in values.items():
            setattr(entity, key, value)
        self.db.flush()
        return entity

    def delete(self, entity: ModelType) -> None:
        """Delete an entity (ORM cascades apply)"""
        self.db.delete(entity)
        self.db.flush()
