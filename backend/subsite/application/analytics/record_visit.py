# subsite/application/analytics/record_visit.py
import ipaddress
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from subsite.store.base import ContentStore


class VisitStatus(Enum):
    RECORDED = "recorded"
    SKIPPED = "skipped"
    DROPPED = "dropped"
    FAILED = "failed"


@dataclass(frozen=True)
class RecordResult:
    status: VisitStatus
    error: Optional[Exception] = None


def visit_key(visitor: str, hostname: str, path: str) -> str:
    return f"{visitor}@{hostname}{path}"


def is_self_request(visitor: Optional[str], self_addresses: Iterable[str] = ()) -> bool:
    """
    True for loopback visitors in either address family and for any
    explicitly listed address.

    "127.0.0.1", "::1", "::ffff:127.0.0.1" -> True
    "203.0.113.9" -> False
    """
    if visitor in self_addresses:
        return True

    try:
        address = ipaddress.ip_address(visitor)
    except ValueError:
        return False

    # IPv4 clients of a dual-stack listener arrive as ::ffff:a.b.c.d
    if address.version == 6 and address.ipv4_mapped is not None:
        address = address.ipv4_mapped

    return address.is_loopback


def record_visit(
    *,
    store: ContentStore,
    visitor: str,
    hostname: str,
    path: str,
    self_addresses: Iterable[str] = (),
) -> RecordResult:
    """
    Record one deduplicated visit.

    Requests from the server's own machine are skipped. Store failures
    are returned in the result, never raised, and never retried.
    """
    if is_self_request(visitor, self_addresses):
        return RecordResult(VisitStatus.SKIPPED)

    try:
        store.record_visit(visit_key(visitor, hostname, path), hostname + path)
    except Exception as e:
        return RecordResult(VisitStatus.FAILED, error=e)

    return RecordResult(VisitStatus.RECORDED)
