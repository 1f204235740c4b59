from abc import ABC, abstractmethod
from typing import List

from subsite.domain.content import ProjectRecord, SectionRecord


class ContentStore(ABC):
    """
    Data source for homepage composition and visit analytics.

    Implementations return rows in the order the backing store yields
    them and raise StoreError on query failure.
    """

    @abstractmethod
    async def fetch_sections(self) -> List[SectionRecord]:
        ...

    @abstractmethod
    async def fetch_projects(self, section_id: int) -> List[ProjectRecord]:
        ...

    @abstractmethod
    def record_visit(self, hash: str, url: str) -> None:
        """Insert one analytics row; a no-op when `hash` already exists."""
