"""
Base Repository Pattern

Provides a generic, type-safe base class for the team and user repositories.
"""

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pydantic import BaseModel

# Type variable for the model class
T = TypeVar("T", bound=BaseModel)


class BaseRepository(Generic[T]):
    """
    Generic base repository providing common CRUD operations.

    Type Parameters:
        T: The Pydantic model class this repository manages

    Usage:
        class TeamRepository(BaseRepository[Team]):
            collection_name = "teams"
            model_class = Team
    """

    # Subclasses must define these
    collection_name: str
    model_class: Type[T]

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection: AsyncIOMotorCollection = db[self.collection_name]

    def _to_model(self, data: Optional[Dict[str, Any]]) -> Optional[T]:
        """Convert a raw document to a model instance."""
        if data is None:
            return None
        return self.model_class(**data)

    def _to_model_list(self, docs: List[Dict[str, Any]]) -> List[T]:
        """Convert a list of raw documents to model instances."""
        return [self.model_class(**doc) for doc in docs]

    async def get_by_id(self, id: str) -> Optional[T]:
        """Get a document by ID and return as model instance."""
        data = await self.collection.find_one({"_id": id})
        return self._to_model(data)

    async def find_one(self, query: Dict[str, Any]) -> Optional[T]:
        """Find one document matching query and return as model instance."""
        data = await self.collection.find_one(query)
        return self._to_model(data)

    async def find_many(
        self,
        query: Dict[str, Any],
        sort_by: Optional[str] = None,
        sort_order: int = 1,
        limit: Optional[int] = None,
    ) -> List[T]:
        """Find documents matching query. No limit returns every match."""
        cursor = self.collection.find(query)
        if sort_by:
            cursor = cursor.sort(sort_by, sort_order)
        if limit:
            cursor = cursor.limit(limit)
        docs = await cursor.to_list(limit)
        return self._to_model_list(docs)

    async def find_by_ids(self, ids: List[str]) -> List[T]:
        """Find documents by list of IDs."""
        if not ids:
            return []
        return await self.find_many({"_id": {"$in": ids}})

    async def create(self, model: T) -> T:
        """Create a new document from a model instance."""
        await self.collection.insert_one(model.model_dump(by_alias=True))
        return model

    async def delete(self, id: str) -> bool:
        """Delete a document by ID."""
        result = await self.collection.delete_one({"_id": id})
        return result.deleted_count > 0
