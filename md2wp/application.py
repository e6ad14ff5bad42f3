"""
Publish Markdown files to WordPress.

Copyright 2026, md2wp contributors

:see: https://developer.wordpress.org/rest-api/
"""

import logging

from .api import WordPressAPI
from .environment import SynchronizerConfiguration
from .manifest import fetch_manifest
from .publisher import Publisher
from .source import SourceReader
from .synchronizer import SynchronizationSummary, Synchronizer
from .tracker import ChangeTracker

LOGGER = logging.getLogger(__name__)


class Application:
    """
    The entry point for Markdown to WordPress synchronization.

    This is the class instantiated by the command-line application.
    """

    config: SynchronizerConfiguration

    def __init__(self, config: SynchronizerConfiguration) -> None:
        self.config = config

    def run(self) -> SynchronizationSummary:
        """
        Fetches the manifest, and publishes each listed document that has changed since the last run.

        :raises ManifestFetchError: Raised when the manifest cannot be fetched or decoded.
        :raises PersistenceError: Raised when the fingerprint store cannot be read or written.
        """

        LOGGER.info("Starting the publishing process...")

        tracker = ChangeTracker(self.config.fingerprint_path)
        tracker.load()

        with SourceReader(timeout=self.config.timeout) as reader:
            entries = fetch_manifest(reader, self.config.source_url)

            with WordPressAPI(self.config) as api:
                publisher = Publisher(api, self.config.collection)
                summary = Synchronizer(reader, tracker, publisher).synchronize(entries)

        LOGGER.info("Publishing process completed.")
        return summary
