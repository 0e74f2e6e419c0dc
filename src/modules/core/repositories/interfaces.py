"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the base abstract class that all
domain-specific repository interfaces extend.  Service-layer code
depends on this abstraction, never on Django ORM directly.

A repository is a unit of work: ``add`` / ``update`` / ``remove`` only
stage changes, and ``commit`` is the single durability point.  Use it
as an async context manager so staged changes are discarded on every
exit path that did not commit::

    async with ProductDjangoRepository() as repo:
        await repo.add(product)
        await repo.commit()
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType
from typing import Generic, List, Optional, Sequence, Type, TypeVar

T = TypeVar("T")
R = TypeVar("R", bound="IRepository")


class StaleEntityError(Exception):
    """Raised by ``commit`` when a staged update or removal finds no row.

    The entity was read in this scope but deleted by another one before
    the flush.  Nothing staged in the scope is applied.
    """

    def __init__(self, key) -> None:
        self.key = key
        super().__init__(f"Entity {key!r} no longer exists.")


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the domain entity managed by the
    repository (e.g. ``Product``).
    """

    async def __aenter__(self: R) -> R:
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        await self.rollback()

    @abstractmethod
    async def get_all(self) -> List[T]:
        """Return every entity in the store's natural order."""

    @abstractmethod
    async def get_by_id(self, id: int) -> Optional[T]:
        """Retrieve an entity by its primary key."""

    @abstractmethod
    async def add(self, entity: T) -> None:
        """Stage a new entity for insertion."""

    @abstractmethod
    async def update(
        self, entity: T, fields: Optional[Sequence[str]] = None
    ) -> None:
        """Stage changes to an existing entity.

        Only ``fields`` are written when given; otherwise every column is.
        """

    @abstractmethod
    async def remove(self, entity: T) -> None:
        """Stage an entity for deletion."""

    @abstractmethod
    async def commit(self) -> None:
        """Apply every staged change atomically.

        Raises:
            StaleEntityError: if a staged update or removal matches no row.
        """

    @abstractmethod
    async def rollback(self) -> None:
        """Discard staged changes that were not committed."""
