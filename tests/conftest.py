import asyncio

import pytest

from subsite import create_app
from subsite.domain.content import ProjectRecord, SectionRecord
from subsite.errors import StoreError
from subsite.store.base import ContentStore

VISITOR = "203.0.113.9"

TEMPLATE = (
    "<!DOCTYPE html>\n"
    "<html><head><title>Home</title></head>"
    '<body><h1>Projects</h1><main id="sections"><p>Loading</p></main></body></html>'
)


class FakeStore(ContentStore):
    """In-memory store with per-section latency and injectable failures."""

    def __init__(self, sections=(), projects=None, delays=None):
        self.sections = list(sections)
        self.projects = projects or {}
        self.delays = delays or {}

        self.fail_sections = False
        self.fail_projects = set()
        self.fail_visits = False

        self.visits = {}
        self.project_queries = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def fetch_sections(self):
        if self.fail_sections:
            raise StoreError("sections unavailable")
        return list(self.sections)

    async def fetch_projects(self, section_id):
        self.project_queries.append(section_id)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(section_id, 0))
            if section_id in self.fail_projects:
                raise StoreError(f"projects unavailable for {section_id}")
            return list(self.projects.get(section_id, []))
        finally:
            self.in_flight -= 1

    def record_visit(self, hash, url):
        if self.fail_visits:
            raise StoreError("analytics unavailable")
        self.visits.setdefault(hash, url)


@pytest.fixture
def fake_store():
    return FakeStore(
        sections=[SectionRecord(id=1, title="Tools")],
        projects={
            1: [ProjectRecord(id=1, section=1, title="Widget", url="http://w", repo=None)],
        },
    )


@pytest.fixture
def content_roots(tmp_path):
    public = tmp_path / "public"
    public.mkdir()
    (public / "index.html").write_text(TEMPLATE)
    (public / "style.css").write_text("body { margin: 0; }")

    apps = tmp_path / "apps"
    apps.mkdir()

    blog = apps / "blog"
    blog.mkdir()
    (blog / "index.html").write_text(TEMPLATE.replace("Projects", "Blog"))
    (blog / "about.txt").write_text("about the blog")
    (blog / "docs").mkdir()
    (blog / "docs" / "index.html").write_text("<html><body>docs</body></html>")
    (blog / "empty").mkdir()

    # tenant without a homepage template
    (apps / "bare").mkdir()

    broken = apps / "broken"
    broken.mkdir()
    (broken / "index.html").write_text("<html><body><main></main></body></html>")

    # outside every content root
    (tmp_path / "secret.txt").write_text("do not serve")

    return {"public": public, "apps": apps}


@pytest.fixture
def make_app(tmp_path, content_roots):
    apps = []

    def _make_app(store=None, **overrides):
        config = {
            "PUBLIC_ROOT": str(content_roots["public"]),
            "APPS_ROOT": str(content_roots["apps"]),
            "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'subsite.db'}",
        }
        config.update(overrides)
        app = create_app("testing", store=store, overrides=config)
        apps.append(app)
        return app

    yield _make_app

    for app in apps:
        app.extensions["analytics"].shutdown()


@pytest.fixture
def app(make_app, fake_store):
    return make_app(store=fake_store)


@pytest.fixture
def client(app):
    client = app.test_client()
    client.environ_base["REMOTE_ADDR"] = VISITOR
    return client
