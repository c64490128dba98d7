"""Page composition: header, title, rendered content and an optional author bio."""

from __future__ import annotations

import logging

from markupsafe import Markup

from scriptorium.core.authors import Author
from scriptorium.core.config import SiteSettings
from scriptorium.engine.template_loader import TemplateLoader

logger = logging.getLogger(__name__)

PAGE_TEMPLATE = "page.html.jinja"


class PageComposer:
    """Arranges rendered content inside the site's fixed layout.

    Plain ``str`` content is escaped. :class:`Markup` content is embedded as-is,
    so only fragments produced by the renderer (or otherwise trusted) should be
    passed as ``Markup``.
    """

    def __init__(self, site: SiteSettings | None = None, loader: TemplateLoader | None = None) -> None:
        self.site = site if site is not None else SiteSettings()
        self.loader = loader if loader is not None else TemplateLoader()

    def compose_page(self, title: str, content: Markup | str, author: Author | None = None) -> Markup:
        """Render a full HTML page.

        Args:
            title: Page title, shown in ``<title>`` and the title block.
            content: Rendered HTML fragment.
            author: When given, an author bio block is appended after the content.

        Returns:
            The complete HTML document.

        """
        logger.debug("Composing page %r (author: %s)", title, author.full_name if author else "none")
        return self.loader.render_template(
            PAGE_TEMPLATE,
            site=self.site,
            title=title,
            content=content,
            author=author,
        )


def compose_page(
    title: str,
    content: Markup | str,
    author: Author | None = None,
    *,
    site: SiteSettings | None = None,
) -> Markup:
    """Compose a page with a one-off :class:`PageComposer`."""
    return PageComposer(site=site).compose_page(title, content, author)
