"""
Publish Markdown files to WordPress.

Copyright 2026, md2wp contributors

:see: https://developer.wordpress.org/rest-api/
"""

import logging

from .api import WordPressSession
from .api_types import WordPressPage, WordPressPageRequest, WordPressStatus
from .environment import PublishError, WordPressError

LOGGER = logging.getLogger(__name__)


class _MissingType:
    pass


_MissingDefault = _MissingType()


class SlugIndex:
    """
    Maintains a catalog of slug to page associations discovered or written during a single run.

    A slug maps to a page, or to `None` if a lookup found no page with that slug.
    """

    _pages: dict[str, WordPressPage | None]

    def __init__(self) -> None:
        self._pages = {}

    def __contains__(self, slug: str) -> bool:
        return slug in self._pages

    def __len__(self) -> int:
        return len(self._pages)

    def get(self, slug: str) -> WordPressPage | None | _MissingType:
        "Returns the page associated with the slug, `None` if the slug is known to be absent, or a sentinel if unknown."

        return self._pages.get(slug, _MissingDefault)

    def add(self, slug: str, page: WordPressPage | None) -> None:
        self._pages[slug] = page


class Publisher:
    """
    Creates or updates WordPress pages identified by their slug.
    """

    api: WordPressSession
    collection: str
    index: SlugIndex

    def __init__(self, api: WordPressSession, collection: str, index: SlugIndex | None = None) -> None:
        """
        Initializes a new publisher instance.

        :param api: Holds information about an open session to a WordPress site.
        :param collection: WordPress content type to publish into, e.g. `pages`.
        :param index: Slug to page catalog shared for the duration of a run.
        """

        self.api = api
        self.collection = collection
        self.index = index if index is not None else SlugIndex()

    def resolve_slug(self, slug: str) -> WordPressPage | None:
        """
        Finds the page with the given slug, consulting the slug index before querying WordPress.

        :param slug: Page slug.
        :returns: The matching page, or `None` if no page has the slug.
        :raises WordPressError: Raised when the lookup request fails.
        """

        known = self.index.get(slug)
        if not isinstance(known, _MissingType):
            LOGGER.debug("Resolved slug from index: %s", slug)
            return known

        page = self.api.get_page_by_slug(self.collection, slug)
        self.index.add(slug, page)
        return page

    def _resolve_parent_id(self, parent_slug: str | None) -> int:
        if parent_slug is None:
            return 0

        parent = self.resolve_slug(parent_slug)
        if parent is None:
            LOGGER.warning("Parent page with slug '%s' not found. Publishing without a parent.", parent_slug)
            return 0

        return parent.id

    def publish(self, slug: str, title: str, html: str, parent_slug: str | None = None, order: int = 0) -> WordPressPage:
        """
        Creates a page, or replaces the title, content, parent and order of an existing page with the same slug.

        The page is always set to published status.

        :param slug: Page slug.
        :param title: Page title.
        :param html: Page body as HTML.
        :param parent_slug: Slug of the parent page, if any.
        :param order: Position of the page among its siblings.
        :raises PublishError: Raised when WordPress rejects the request, or the request fails in transport.
        """

        LOGGER.info("Publishing content with slug: %s", slug)
        try:
            parent_id = self._resolve_parent_id(parent_slug)
            existing = self.resolve_slug(slug)

            request = WordPressPageRequest(
                title=title,
                content=html,
                slug=slug,
                parent=parent_id,
                menu_order=order,
                status=WordPressStatus.PUBLISH,
            )
            if existing is not None:
                LOGGER.info("Existing page found with ID %d, updating: %s", existing.id, slug)
                page = self.api.update_page(self.collection, existing.id, request)
            else:
                LOGGER.info("Creating new page with slug: %s", slug)
                page = self.api.create_page(self.collection, request)
        except WordPressError as e:
            raise PublishError(slug, e.endpoint, e.reason) from e

        self.index.add(slug, page)
        LOGGER.info("Page published: %s", page.link or "no link provided")
        return page
