"""
Base Repository for College Advisor

Generic async read-only repository over a SQLModel table.
The lookup store is reference data, so no write operations are exposed.
"""

from abc import ABC, abstractmethod
from typing import Any, TypeVar, Generic, Optional, Type

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel


# Type variable for generic repository
ModelType = TypeVar("ModelType", bound=SQLModel)


class IReadRepository(ABC, Generic[ModelType]):
    """Interface for read operations."""

    @abstractmethod
    async def get_by_key(self, key: Any) -> Optional[ModelType]:
        """Get a single record by primary key."""
        pass

    @abstractmethod
    async def count(self) -> int:
        """Get total count of records."""
        pass


class BaseRepository(IReadRepository[ModelType], Generic[ModelType]):
    """
    Generic async repository with read operations.

    Args:
        model: The SQLModel class to operate on
        session: Async database session
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession):
        self._model = model
        self._session = session

    @property
    def session(self) -> AsyncSession:
        """Get the current session."""
        return self._session

    async def get_by_key(self, key: Any) -> Optional[ModelType]:
        """
        Get a single record by its primary key.

        Args:
            key: Primary key value

        Returns:
            Model instance or None if not found
        """
        return await self._session.get(self._model, key)

    async def count(self) -> int:
        """
        Get total count of records.

        Returns:
            Total number of records
        """
        stmt = select(func.count()).select_from(self._model)
        result = await self._session.execute(stmt)
        return result.scalar_one()
