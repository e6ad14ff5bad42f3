"""
Publish Markdown files to WordPress.

Copyright 2026, md2wp contributors

:see: https://developer.wordpress.org/rest-api/
"""

import enum
import logging
import typing
from dataclasses import dataclass, field
from typing import Iterable

from .api_types import WordPressPage
from .converter import convert
from .environment import DocumentError, DocumentFetchError, PublishError
from .manifest import ManifestEntry
from .publisher import Publisher
from .source import SourceReader
from .tracker import ChangeTracker

LOGGER = logging.getLogger(__name__)


@enum.unique
class EntryStatus(enum.Enum):
    "Final state of a manifest entry after processing."

    PUBLISHED = "published"
    UNCHANGED = "unchanged"
    FAILED = "failed"


@dataclass(frozen=True)
class EntryResult:
    """
    Outcome of processing a single manifest entry.

    :param entry: The manifest entry processed.
    :param status: Final state of the entry.
    :param message: Reason for failure, if any.
    :param page: Page written to WordPress, if published.
    """

    entry: ManifestEntry
    status: EntryStatus
    message: str | None = None
    page: WordPressPage | None = None


@dataclass
class SynchronizationSummary:
    "Outcome of processing a manifest."

    results: list[EntryResult] = field(default_factory=list)

    def _count(self, status: EntryStatus) -> int:
        return sum(1 for result in self.results if result.status is status)

    @property
    def published(self) -> int:
        return self._count(EntryStatus.PUBLISHED)

    @property
    def unchanged(self) -> int:
        return self._count(EntryStatus.UNCHANGED)

    @property
    def failed(self) -> int:
        return self._count(EntryStatus.FAILED)

    @property
    def success(self) -> bool:
        return self.failed == 0


class Synchronizer:
    """
    Publishes the documents listed in a manifest, one at a time, skipping documents that have not changed.

    A failure to fetch, convert or publish a document is reported in the summary and does not stop the run.
    Fingerprints of published documents are persisted once, after all entries have been processed.
    """

    reader: SourceReader
    tracker: ChangeTracker
    publisher: Publisher

    def __init__(self, reader: SourceReader, tracker: ChangeTracker, publisher: Publisher) -> None:
        """
        Initializes a new synchronizer instance.

        :param reader: Fetches Markdown source documents.
        :param tracker: Decides whether a document has changed since it was last published.
        :param publisher: Creates or updates WordPress pages.
        """

        self.reader = reader
        self.tracker = tracker
        self.publisher = publisher

    def synchronize(self, entries: Iterable[ManifestEntry]) -> SynchronizationSummary:
        """
        Processes all manifest entries in order, then persists fingerprints.

        :raises PersistenceError: Raised when fingerprints cannot be persisted. Pages already published are kept.
        """

        summary = SynchronizationSummary()
        for entry in entries:
            result = self.process_entry(entry)
            if result.status is EntryStatus.FAILED:
                LOGGER.warning("Skipping manifest entry '%s': %s", entry.key, result.message)
            summary.results.append(result)

        self.tracker.flush()

        LOGGER.info(
            "Synchronized %d document(s): %d published, %d unchanged, %d failed",
            len(summary.results),
            summary.published,
            summary.unchanged,
            summary.failed,
        )
        return summary

    def process_entry(self, entry: ManifestEntry) -> EntryResult:
        "Fetches, converts and publishes a single document if its content has changed."

        problem = entry.validate()
        if problem is not None:
            return EntryResult(entry, EntryStatus.FAILED, f"invalid manifest entry: {problem}")

        # validated as non-empty above
        slug = typing.cast(str, entry.slug)
        source = typing.cast(str, entry.source)

        LOGGER.info("Processing file from URL: %s", source)
        try:
            content = self.reader.read_text(source)
        except DocumentFetchError as e:
            return EntryResult(entry, EntryStatus.FAILED, str(e))

        if not self.tracker.has_changed(source, content):
            LOGGER.info("No changes detected for URL: %s. Skipping update.", source)
            return EntryResult(entry, EntryStatus.UNCHANGED)

        try:
            document = convert(content)
            page = self.publisher.publish(slug, document.title, document.html, entry.parent, entry.order)
        except (DocumentError, PublishError) as e:
            return EntryResult(entry, EntryStatus.FAILED, str(e))

        self.tracker.record(source, content)
        return EntryResult(entry, EntryStatus.PUBLISHED, page=page)
