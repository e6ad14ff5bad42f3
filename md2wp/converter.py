"""
Publish Markdown files to WordPress.

Copyright 2026, md2wp contributors

:see: https://developer.wordpress.org/rest-api/
"""

import logging
from dataclasses import dataclass

from .environment import DocumentError
from .markdown import markdown_to_html

LOGGER = logging.getLogger(__name__)

DEFAULT_TITLE = "Untitled"


@dataclass(frozen=True)
class ConvertedDocument:
    """
    A Markdown document converted into a page title and an HTML page body.

    :param title: Page title taken from the first line of the Markdown source.
    :param html: HTML rendering of the remaining lines.
    """

    title: str
    html: str


def extract_title(line: str) -> str:
    "Strips heading markers and whitespace from a line, falling back to a placeholder title if nothing remains."

    title = line.strip("# \t\r")
    return title or DEFAULT_TITLE


def convert(content: str) -> ConvertedDocument:
    """
    Splits a Markdown document into a title and a body, and renders the body as HTML.

    The first line is the title; all other lines make up the body.

    :param content: Markdown source text.
    :raises DocumentError: Raised when the Markdown renderer fails on the input.
    """

    title_line, _, body = content.partition("\n")
    title = extract_title(title_line)

    try:
        html = markdown_to_html(body)
    except Exception as e:
        raise DocumentError(f"unable to render Markdown document '{title}': {e}") from e

    LOGGER.debug("Converted document '%s' into %d characters of HTML", title, len(html))
    return ConvertedDocument(title=title, html=html)
