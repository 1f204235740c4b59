from .section import Section
from .project import Project
from .analytics_event import AnalyticsEvent

__all__ = ["Section", "Project", "AnalyticsEvent"]
