import threading
from concurrent.futures import Future

import pytest

from subsite.application.analytics import (
    AnalyticsRecorder,
    VisitStatus,
    is_self_request,
    record_visit,
    visit_key,
)
from subsite.extensions import db
from subsite.models import AnalyticsEvent
from subsite.store import SqlContentStore


def record(store, visitor="203.0.113.9", hostname="blog.jessesolomon.dev", path="/about.txt"):
    return record_visit(
        store=store,
        visitor=visitor,
        hostname=hostname,
        path=path,
        self_addresses=("::1",),
    )


def test_visit_key_combines_visitor_host_and_path():
    assert visit_key("203.0.113.9", "blog.example.com", "/a") == "203.0.113.9@blog.example.com/a"


def test_visit_is_recorded(fake_store):
    result = record(fake_store)

    assert result.status is VisitStatus.RECORDED
    assert fake_store.visits == {
        "203.0.113.9@blog.jessesolomon.dev/about.txt": "blog.jessesolomon.dev/about.txt"
    }


def test_self_requests_are_skipped(fake_store):
    result = record(fake_store, visitor="::1")

    assert result.status is VisitStatus.SKIPPED
    assert fake_store.visits == {}


def test_identical_visits_collapse(fake_store):
    record(fake_store)
    record(fake_store)
    record(fake_store, path="/")

    assert len(fake_store.visits) == 2


def test_store_failure_is_returned_not_raised(fake_store):
    fake_store.fail_visits = True

    result = record(fake_store)

    assert result.status is VisitStatus.FAILED
    assert "analytics unavailable" in str(result.error)


def test_recorder_runs_in_background(app, fake_store):
    recorder = AnalyticsRecorder(fake_store, self_addresses=("::1",), logger=app.logger)
    try:
        future = recorder.submit("203.0.113.9", "localhost", "/")
        assert isinstance(future, Future)

        recorder.flush(timeout=5)

        assert future.result().status is VisitStatus.RECORDED
        assert "203.0.113.9@localhost/" in fake_store.visits
    finally:
        recorder.shutdown()


def test_recorder_swallows_failures(app, fake_store):
    fake_store.fail_visits = True
    recorder = AnalyticsRecorder(fake_store, self_addresses=(), logger=app.logger)
    try:
        future = recorder.submit("203.0.113.9", "localhost", "/")
        recorder.flush(timeout=5)

        assert future.result().status is VisitStatus.FAILED
    finally:
        recorder.shutdown()


def test_sql_store_keeps_one_row_per_hash(make_app):
    app = make_app()
    store = app.extensions["content_store"]
    assert isinstance(store, SqlContentStore)

    record(store)
    record(store)
    record(store, visitor="198.51.100.1")

    with app.app_context():
        rows = db.session.execute(db.select(AnalyticsEvent).order_by(AnalyticsEvent.hash)).scalars().all()

    assert [(row.hash, row.url) for row in rows] == [
        ("198.51.100.1@blog.jessesolomon.dev/about.txt", "blog.jessesolomon.dev/about.txt"),
        ("203.0.113.9@blog.jessesolomon.dev/about.txt", "blog.jessesolomon.dev/about.txt"),
    ]


@pytest.mark.parametrize(
    "visitor,expected",
    [
        ("127.0.0.1", True),
        ("127.8.0.1", True),
        ("::1", True),
        ("::ffff:127.0.0.1", True),
        ("203.0.113.9", False),
        ("2001:db8::1", False),
        ("::ffff:203.0.113.9", False),
        (None, False),
        ("not-an-address", False),
    ],
)
def test_loopback_visitors_are_self_requests(visitor, expected):
    assert is_self_request(visitor) is expected


def test_listed_addresses_are_self_requests():
    assert is_self_request("10.0.0.5", ("10.0.0.5",)) is True


def test_ipv4_loopback_is_skipped(fake_store):
    result = record(fake_store, visitor="127.0.0.1")

    assert result.status is VisitStatus.SKIPPED
    assert fake_store.visits == {}


class BlockingStore:
    def __init__(self):
        self.release = threading.Event()
        self.visits = []

    def record_visit(self, hash, url):
        self.release.wait(timeout=5)
        self.visits.append(hash)


def test_recorder_drops_visits_when_backlog_is_full(app):
    store = BlockingStore()
    recorder = AnalyticsRecorder(store, logger=app.logger, max_pending=2)
    try:
        first = recorder.submit("203.0.113.1", "localhost", "/")
        second = recorder.submit("203.0.113.2", "localhost", "/")
        third = recorder.submit("203.0.113.3", "localhost", "/")

        assert third.done()
        assert third.result().status is VisitStatus.DROPPED

        store.release.set()
        recorder.flush(timeout=5)

        assert first.result().status is VisitStatus.RECORDED
        assert second.result().status is VisitStatus.RECORDED
        assert store.visits == ["203.0.113.1@localhost/", "203.0.113.2@localhost/"]

        fourth = recorder.submit("203.0.113.4", "localhost", "/")
        recorder.flush(timeout=5)
        assert fourth.result().status is VisitStatus.RECORDED
    finally:
        store.release.set()
        recorder.shutdown()
