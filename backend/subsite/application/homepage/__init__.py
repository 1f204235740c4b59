from .compose_homepage import compose_homepage, render_sections

__all__ = ["compose_homepage", "render_sections"]
