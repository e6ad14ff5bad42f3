"""
Publish Markdown files to WordPress.

Copyright 2026, md2wp contributors

:see: https://developer.wordpress.org/rest-api/
"""

import logging
from pathlib import Path
from types import TracebackType
from urllib.parse import urlparse
from urllib.request import url2pathname

import requests

from .environment import DEFAULT_TIMEOUT, DocumentFetchError

LOGGER = logging.getLogger(__name__)


class SourceReader:
    """
    Fetches the text of a manifest or a Markdown document.

    Accepts `http://` and `https://` URLs, `file://` URLs and local file system paths. Text is decoded as UTF-8.
    """

    timeout: float
    _session: requests.Session

    def __init__(self, *, timeout: float = DEFAULT_TIMEOUT, session: requests.Session | None = None) -> None:
        self.timeout = timeout
        self._session = session if session is not None else requests.Session()

    def __enter__(self) -> "SourceReader":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        self._session.close()

    def read_text(self, source_ref: str) -> str:
        """
        Fetches the text found at a location.

        :param source_ref: URL or local path.
        :raises DocumentFetchError: Raised when the location is unreachable or the content is not valid UTF-8.
        """

        try:
            location = urlparse(source_ref)
        except ValueError as e:
            raise DocumentFetchError(f"invalid location {source_ref}: {e}") from e

        scheme = location.scheme.lower()
        if scheme in ("http", "https"):
            data = self._read_url(source_ref)
        elif scheme == "file":
            data = self._read_file(Path(url2pathname(location.path)), source_ref)
        else:
            data = self._read_file(Path(source_ref), source_ref)

        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DocumentFetchError(f"content is not valid UTF-8 text: {source_ref}") from e

    def _read_url(self, url: str) -> bytes:
        LOGGER.debug("Fetching URL: %s", url)
        try:
            response = self._session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise DocumentFetchError(f"could not fetch URL {url}: {e}") from e
        return response.content

    def _read_file(self, path: Path, source_ref: str) -> bytes:
        LOGGER.debug("Reading file: %s", path)
        try:
            return path.read_bytes()
        except (OSError, ValueError) as e:
            raise DocumentFetchError(f"could not read file {source_ref}: {e}") from e
