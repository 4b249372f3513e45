"""Use Case for the administrator's application overview."""

from math import ceil
from typing import Optional

from domain.enums import ApplicationStatus
from domain.repositories import IApplicationRepository
from infrastructure.config import get_logger


class ListApplicationsUseCase:
    """Page through applications, optionally filtered by status or a search term."""

    def __init__(self, repository: IApplicationRepository):
        self.repository = repository
        self.logger = get_logger(self.__class__.__name__)

    async def execute(
        self,
        status: Optional[ApplicationStatus] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 20,
    ) -> dict:
        """
        Returns:
            {
                "applications": List[ApplicationRecord],
                "total": int,
                "page": int,
                "limit": int,
                "pages": int
            }
        """
        if page < 1 or limit < 1:
            raise ValueError("page and limit must be positive")

        search = search.strip() if search else None
        records, total = await self.repository.list_applications(
            status=status,
            search=search or None,
            limit=limit,
            offset=(page - 1) * limit,
        )
        self.logger.debug(f"Listed {len(records)} of {total} applications (page {page})")

        return {
            "applications": records,
            "total": total,
            "page": page,
            "limit": limit,
            "pages": ceil(total / limit),
        }
