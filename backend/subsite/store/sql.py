import asyncio
from typing import List

from sqlalchemy import insert, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from subsite.domain.content import ProjectRecord, SectionRecord
from subsite.errors import StoreError
from subsite.models import AnalyticsEvent, Project, Section
from .base import ContentStore


class SqlContentStore(ContentStore):
    """
    ContentStore over a shared SQLAlchemy engine.

    Every statement runs on its own pooled connection and autocommits,
    so there is no isolation between the section and project queries of
    one composition.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    async def fetch_sections(self) -> List[SectionRecord]:
        return await asyncio.to_thread(self._select_sections)

    async def fetch_projects(self, section_id: int) -> List[ProjectRecord]:
        return await asyncio.to_thread(self._select_projects, section_id)

    def record_visit(self, hash: str, url: str) -> None:
        stmt = (
            insert(AnalyticsEvent.__table__)
            .values(hash=hash, url=url)
            .prefix_with("IGNORE", dialect="mysql")
            .prefix_with("OR IGNORE", dialect="sqlite")
        )
        try:
            with self.engine.begin() as conn:
                conn.execute(stmt)
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to record visit {hash!r}") from e

    # ------------------------
    # Blocking queries
    # ------------------------

    def _select_sections(self) -> List[SectionRecord]:
        stmt = select(Section.id, Section.title)
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(stmt).all()
        except SQLAlchemyError as e:
            raise StoreError("Failed to load sections") from e

        return [SectionRecord(id=row.id, title=row.title) for row in rows]

    def _select_projects(self, section_id: int) -> List[ProjectRecord]:
        stmt = select(
            Project.id,
            Project.section,
            Project.title,
            Project.url,
            Project.repo,
        ).where(Project.section == section_id)
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(stmt).all()
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to load projects for section {section_id}") from e

        return [
            ProjectRecord(
                id=row.id,
                section=row.section,
                title=row.title,
                url=row.url,
                repo=row.repo,
            )
            for row in rows
        ]
