# subsite/application/homepage/compose_homepage.py
import asyncio

from bs4 import BeautifulSoup

from subsite.errors import CompositionError, MissingContainerError, StoreError
from subsite.renderers.section import render_section
from subsite.store.base import ContentStore


async def _render_section_fragment(store: ContentStore, section) -> str:
    projects = await store.fetch_projects(section.id)
    return render_section(section, projects)


async def render_sections(store: ContentStore, separator: str = "<br/>") -> str:
    """
    Render every section with its projects.

    One project query per section is in flight at once. Fragments are
    joined in the order the sections were returned, whatever order the
    project queries complete in.
    """
    sections = await store.fetch_sections()

    tasks = [
        asyncio.ensure_future(_render_section_fragment(store, section))
        for section in sections
    ]
    try:
        fragments = await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        raise

    return separator.join(fragments)


def set_content(element, html: str) -> None:
    """Replace the inner content of `element` with parsed `html`."""
    element.clear()
    element.append(BeautifulSoup(html, "html.parser"))


async def compose_homepage(
    store: ContentStore,
    template: str,
    *,
    selector: str = "#sections",
    separator: str = "<br/>",
) -> str:
    """
    Inject the rendered sections into the template's container.

    Responsibilities:
    - locate the container before any query is issued
    - fan out the per-section queries
    - serialize the mutated document

    Raises MissingContainerError when the template has no element
    matching `selector`, CompositionError when a query fails.
    """
    document = BeautifulSoup(template, "html.parser")
    container = document.select_one(selector)

    if container is None:
        raise MissingContainerError(f"Template has no element matching {selector!r}")

    try:
        content = await render_sections(store, separator)
    except StoreError as e:
        raise CompositionError(str(e)) from e

    set_content(container, content)

    return str(document)
