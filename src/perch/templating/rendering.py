"""kida environments for the viewer templates.

Both templates ship inside this package. The HTML shell is rendered with
autoescaping on; the bootstrap script receives pre-serialized JSON and is
rendered verbatim.
"""

from collections.abc import Mapping
from typing import Any

from kida import Environment, PackageLoader
from kida.template import Markup

from perch.documents.formats import encode_json

INDEX_TEMPLATE = "index.html"
INIT_SCRIPT_TEMPLATE = "swagger-ui-init.js"

DEFAULT_FAVICON = (
    '<link rel="icon" type="image/png" href="./favicon-32x32.png" sizes="32x32" />'
    '<link rel="icon" type="image/png" href="./favicon-16x16.png" sizes="16x16" />'
)


class UITemplates:
    """Renders the UI shell page and the bootstrap script to bytes."""

    __slots__ = ("_html_env", "_js_env")

    def __init__(self) -> None:
        loader = PackageLoader("perch.templating", "templates")
        self._html_env = Environment(loader=loader, autoescape=True)
        self._js_env = Environment(loader=loader, autoescape=False)

    def render_index(self, *, title: str, favicon: str = DEFAULT_FAVICON) -> bytes:
        """Render the UI shell with *title* and the favicon links."""
        template = self._html_env.get_template(INDEX_TEMPLATE)
        html = template.render({"title": title, "favicon": Markup(favicon)})
        return html.encode("utf-8")

    def render_init_script(self, document: Mapping[str, Any], *, swagger_url: str) -> bytes:
        """Render the bootstrap script embedding *document* as JSON."""
        options = encode_json(
            {
                "swaggerDoc": document,
                "customOptions": {},
                "swaggerUrl": swagger_url,
            }
        )
        template = self._js_env.get_template(INIT_SCRIPT_TEMPLATE)
        return template.render({"options": options}).encode("utf-8")
