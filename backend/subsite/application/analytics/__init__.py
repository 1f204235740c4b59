from .record_visit import RecordResult, VisitStatus, is_self_request, record_visit, visit_key
from .recorder import AnalyticsRecorder

__all__ = [
    "AnalyticsRecorder",
    "RecordResult",
    "VisitStatus",
    "is_self_request",
    "record_visit",
    "visit_key",
]
