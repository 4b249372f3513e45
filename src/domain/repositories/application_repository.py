"""Application repository interface - Abstract definition."""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from domain.entities import ApplicationRecord
from domain.enums import ApplicationStatus


class IApplicationRepository(ABC):
    """
    Abstract repository interface for ApplicationRecord entity.

    Writes are conditional on the version the caller read, which gives
    single-writer-wins semantics for every application.
    Concrete implementations will be in the infrastructure layer.
    """

    @abstractmethod
    async def create(self, record: ApplicationRecord) -> ApplicationRecord:
        """
        Persist a newly submitted application.

        Args:
            record: ApplicationRecord entity to create

        Returns:
            Created ApplicationRecord

        Raises:
            StorageError: If the store is unavailable
        """
        pass

    @abstractmethod
    async def get_by_id(self, application_id: UUID) -> Optional[ApplicationRecord]:
        """
        Retrieve an application by ID, at its current version.

        Args:
            application_id: Application UUID

        Returns:
            ApplicationRecord if found, None otherwise

        Raises:
            StorageError: If the store is unavailable
        """
        pass

    @abstractmethod
    async def save(self, record: ApplicationRecord, expected_version: int) -> ApplicationRecord:
        """
        Replace the stored application if its version is still the expected one.

        Args:
            record: ApplicationRecord with updated data
            expected_version: Version the caller loaded

        Returns:
            Saved ApplicationRecord carrying the incremented version

        Raises:
            ConcurrentModificationError: If another writer saved first
            StorageError: If the store is unavailable
        """
        pass

    @abstractmethod
    async def list_applications(
        self,
        status: Optional[ApplicationStatus] = None,
        search: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[ApplicationRecord], int]:
        """
        List applications, newest first.

        Args:
            status: Only applications in this status
            search: Case-insensitive match on the application number or either name
            limit: Page size
            offset: Number of matching applications to skip

        Returns:
            The page of applications and the total number of matches

        Raises:
            StorageError: If the store is unavailable
        """
        pass
