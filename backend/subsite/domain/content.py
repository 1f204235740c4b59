from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SectionRecord:
    id: int
    title: str


@dataclass(frozen=True)
class ProjectRecord:
    id: int
    section: int
    title: str
    url: Optional[str] = None
    repo: Optional[str] = None
