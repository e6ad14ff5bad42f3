"""
Publish Markdown files to WordPress.

Copyright 2026, md2wp contributors

:see: https://developer.wordpress.org/rest-api/reference/pages/
"""

import enum
from dataclasses import dataclass


@enum.unique
class WordPressStatus(enum.Enum):
    """
    Publication status of a WordPress post or page.

    This tool only ever writes `PUBLISH`; other values may be observed on existing pages.
    """

    PUBLISH = "publish"
    FUTURE = "future"
    DRAFT = "draft"
    PENDING = "pending"
    PRIVATE = "private"
    TRASH = "trash"
    AUTO_DRAFT = "auto-draft"
    INHERIT = "inherit"


@dataclass(frozen=True)
class WordPressRenderedText:
    """
    A text field as returned by the WordPress REST API.

    :param rendered: HTML as displayed on the site.
    :param raw: Text as stored, available in the `edit` context only.
    """

    rendered: str = ""
    raw: str | None = None


@dataclass(frozen=True)
class WordPressPage:
    """
    Holds WordPress page data used for page synchronization.

    :param id: WordPress page ID.
    :param slug: Alphanumeric identifier unique to the page within its content type.
    :param status: Publication status.
    :param parent: ID of the parent page, or 0 for a top-level page.
    :param menu_order: Position of the page among its siblings.
    :param link: URL of the page on the site.
    :param title: Page title.
    :param content: Page body.
    """

    id: int
    slug: str = ""
    status: WordPressStatus = WordPressStatus.PUBLISH
    parent: int = 0
    menu_order: int = 0
    link: str | None = None
    title: WordPressRenderedText = WordPressRenderedText()
    content: WordPressRenderedText = WordPressRenderedText()


@dataclass(frozen=True)
class WordPressPageRequest:
    """
    Request body to create or fully replace a page.

    :param title: Page title.
    :param content: Page body as HTML.
    :param slug: Page slug.
    :param parent: ID of the parent page, or 0 for a top-level page.
    :param menu_order: Position of the page among its siblings.
    :param status: Publication status.
    """

    title: str
    content: str
    slug: str
    parent: int
    menu_order: int
    status: WordPressStatus
