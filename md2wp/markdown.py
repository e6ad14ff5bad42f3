"""
Publish Markdown files to WordPress.

Copyright 2026, md2wp contributors

:see: https://python-markdown.github.io/
"""

import xml.etree.ElementTree
from typing import Any

import markdown


def _emoji_generator(
    index: str,
    shortname: str,
    alias: str | None,
    uc: str | None,
    alt: str,
    title: str | None,
    category: str | None,
    options: dict[str, Any],
    md: markdown.Markdown,
) -> xml.etree.ElementTree.Element:
    """
    Custom generator for `pymdownx.emoji` that emits the Unicode character instead of an image.
    """

    name = (alias or shortname).strip(":")
    span = xml.etree.ElementTree.Element("span", {"class": "emoji", "title": name})
    if uc is not None:
        # convert series of Unicode code point hexadecimal values into characters
        span.text = "".join(chr(int(item, base=16)) for item in uc.split("-"))
    else:
        span.text = alt
    return span


def _create_converter() -> markdown.Markdown:
    return markdown.Markdown(
        extensions=[
            "admonition",
            "footnotes",
            "markdown.extensions.tables",
            "md_in_html",
            "pymdownx.emoji",
            "pymdownx.highlight",  # required by `pymdownx.superfences`
            "pymdownx.magiclink",
            "pymdownx.superfences",
            "pymdownx.tilde",
            "sane_lists",
        ],
        extension_configs={
            "footnotes": {"BACKLINK_TITLE": ""},
            "pymdownx.emoji": {
                "emoji_generator": _emoji_generator,
            },
            "pymdownx.highlight": {
                "use_pygments": False,
            },
        },
    )


_CONVERTER = _create_converter()


def markdown_to_html(content: str) -> str:
    """
    Converts a Markdown document into HTML with Python-Markdown.

    :param content: Markdown input as a string.
    :returns: HTML output as a string.
    :see: https://python-markdown.github.io/
    """

    _CONVERTER.reset()
    html = _CONVERTER.convert(content)
    return html
