"""HTML template renderer with context-aware autoescaping."""

from __future__ import annotations

from renderkit.renderer import mime_text_html

from .base import BaseTemplate, TemplateOption


class HTMLTemplate(BaseTemplate):
    """Renders HTML; interpolated values are escaped unless marked safe.

    Use the ``to_html`` helper or Jinja2's ``|safe`` filter for trusted
    markup.
    """

    autoescape = True
    default_mime = staticmethod(mime_text_html)


def html(name: str, *opts: TemplateOption) -> HTMLTemplate:
    """Create an HTML template set.

    Example usage:
        ```python
        page = html("page.html", load(FSLoader(LoaderConfig(root="templates"))))
        page.render(sink, {"title": "Home"})
        ```
    """
    return HTMLTemplate(name, *opts)
