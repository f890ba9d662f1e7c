"""
Key-addressed CRUD base.

Session rows are addressed by a client-chosen string key rather than a
generated id, so the base class is parameterized by the key column.

Dependencies: sqlalchemy
System role: Shared lookups for the session CRUD
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from chat_backend.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Lookups and deletes by key for one model.

    Attributes:
        model: Mapped class
        key: Key column attribute (e.g. ChatSessionModel.session_key)
    """

    def __init__(self, model: type[ModelT], key_field: str = "id") -> None:
        self.model = model
        self.key = getattr(model, key_field)

    async def get_by_id(self, session: AsyncSession, key: Any) -> ModelT | None:
        """Load one row by key, going through the session identity map."""
        return await session.get(self.model, key)

    async def delete_by_id(self, session: AsyncSession, key: Any) -> bool:
        """
        Delete one row by key.

        Returns:
            bool: True if a row was removed
        """
        result = await session.execute(delete(self.model).where(self.key == key))
        return result.rowcount > 0
