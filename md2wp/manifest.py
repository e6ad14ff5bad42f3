"""
Publish Markdown files to WordPress.

Copyright 2026, md2wp contributors

:see: https://developer.wordpress.org/rest-api/
"""

import logging
from dataclasses import dataclass

import orjson

from .environment import DocumentFetchError, ManifestFetchError
from .serializer import JsonType, json_loads
from .source import SourceReader

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ManifestEntry:
    """
    A Markdown document to publish, as listed in the manifest.

    :param key: Key of the entry in a manifest object, or its position in a manifest array.
    :param slug: Slug of the target page.
    :param source: URL or path of the Markdown source.
    :param parent: Slug of the parent page, if any.
    :param order: Position of the page among its siblings.
    """

    key: str
    slug: str | None
    source: str | None
    parent: str | None = None
    order: int = 0

    def validate(self) -> str | None:
        "Returns a description of what makes the entry unusable, or `None` if the entry is valid."

        if not self.slug and not self.source:
            return "missing slug and markdown"
        elif not self.slug:
            return "missing slug"
        elif not self.source:
            return "missing markdown"
        else:
            return None


def _optional_string(value: JsonType) -> str | None:
    if isinstance(value, str):
        return value.strip() or None
    return None


def _parse_order(key: str, value: JsonType) -> int:
    if value is None:
        return 0
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass

    LOGGER.warning("Invalid order %r in manifest entry '%s'; using 0", value, key)
    return 0


def _parse_entry(key: str, item: JsonType) -> ManifestEntry:
    if not isinstance(item, dict):
        LOGGER.warning("Manifest entry '%s' is not an object", key)
        return ManifestEntry(key=key, slug=None, source=None)

    return ManifestEntry(
        key=key,
        slug=_optional_string(item.get("slug")),
        source=_optional_string(item.get("markdown")),
        parent=_optional_string(item.get("parent")),
        order=_parse_order(key, item.get("order")),
    )


def parse_manifest(data: JsonType) -> list[ManifestEntry]:
    """
    Builds the ordered list of manifest entries from a decoded JSON document.

    The manifest may be a JSON object (keys identify entries) or a JSON array (positions identify entries).

    :raises ManifestFetchError: Raised when the document is neither an object nor an array.
    """

    if isinstance(data, dict):
        return [_parse_entry(key, item) for key, item in data.items()]
    elif isinstance(data, list):
        return [_parse_entry(str(index), item) for index, item in enumerate(data)]
    else:
        raise ManifestFetchError("expected: JSON object or array as manifest")


def fetch_manifest(reader: SourceReader, source_url: str) -> list[ManifestEntry]:
    """
    Fetches and parses the manifest of documents to publish.

    :param reader: Fetches text from a URL or local path.
    :param source_url: Location of the JSON manifest.
    :raises ManifestFetchError: Raised when the manifest is unreachable or cannot be decoded.
    """

    LOGGER.info("Fetching manifest from: %s", source_url)
    try:
        text = reader.read_text(source_url)
    except DocumentFetchError as e:
        raise ManifestFetchError(f"could not fetch manifest: {e}") from e

    try:
        data = json_loads(text)
    except orjson.JSONDecodeError as e:
        raise ManifestFetchError(f"error decoding manifest {source_url}: {e}") from e

    entries = parse_manifest(data)
    LOGGER.info("Manifest lists %d document(s)", len(entries))
    return entries
