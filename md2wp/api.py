"""
Publish Markdown files to WordPress.

Copyright 2026, md2wp contributors

:see: https://developer.wordpress.org/rest-api/
"""

import logging
import typing
from types import TracebackType
from typing import TypeVar
from urllib.parse import urlencode, urlparse, urlunparse

import requests
from cattrs import BaseValidationError

from .api_types import WordPressPage, WordPressPageRequest
from .environment import SynchronizerConfiguration, WordPressError
from .serializer import JsonType, json_to_object, object_to_json_payload

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


def build_url(base_url: str, query: dict[str, str] | None = None) -> str:
    "Builds a URL with scheme, host, port, path and query string parameters."

    scheme, netloc, path, params, query_str, fragment = urlparse(base_url)

    if params:
        raise ValueError("expected: url with no parameters")
    if query_str:
        raise ValueError("expected: url with no query string")
    if fragment:
        raise ValueError("expected: url with no fragment")

    url_parts = (scheme, netloc, path, None, urlencode(query) if query else None, None)
    return urlunparse(url_parts)


def _error_reason(response: requests.Response) -> str:
    "Extracts a human-readable error message from a WordPress error response."

    reason = f"HTTP status {response.status_code}"
    try:
        payload = typing.cast(JsonType, response.json())
    except requests.JSONDecodeError:
        return reason

    # WordPress reports errors as an object with `code` and `message`
    if isinstance(payload, dict):
        code = payload.get("code")
        message = payload.get("message")
        if code or message:
            return f"{reason} ({code}): {message}"
    return reason


class WordPressAPI:
    """
    Represents an active connection to a WordPress site.
    """

    config: SynchronizerConfiguration
    session: "WordPressSession | None" = None

    def __init__(self, config: SynchronizerConfiguration) -> None:
        self.config = config

    def __enter__(self) -> "WordPressSession":
        session = requests.Session()
        session.auth = (self.config.user_name, self.config.api_key)

        self.session = WordPressSession(
            session,
            api_url=self.config.api_url,
            timeout=self.config.timeout,
        )
        return self.session

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self.session is not None:
            self.session.close()
            self.session = None


class WordPressSession:
    """
    Information about an open session to a WordPress site.

    Each call blocks until the server responds or the timeout elapses. No call is retried.
    """

    _session: requests.Session
    api_url: str
    timeout: float

    def __init__(self, session: requests.Session, *, api_url: str, timeout: float) -> None:
        self._session = session
        self.api_url = api_url
        self.timeout = timeout

    def close(self) -> None:
        self._session.close()

    def _build_url(self, path: str, query: dict[str, str] | None = None) -> str:
        """
        Builds a full URL for invoking the WordPress REST API.

        :param path: Path of API endpoint to invoke, relative to the API root.
        :param query: Query parameters to pass to the API endpoint.
        :returns: A full URL.
        """

        base_url = f"{self.api_url}{path.lstrip('/')}"
        return build_url(base_url, query)

    def _response_cast(self, endpoint: str, response_type: type[T], response: requests.Response) -> T:
        "Converts a response body into the expected type."

        if response.text:
            LOGGER.debug("Received HTTP payload:\n%s", response.text)
        if not response.ok:
            raise WordPressError(endpoint, _error_reason(response))

        try:
            return json_to_object(response_type, response.json())
        except (ValueError, TypeError, BaseValidationError) as e:
            raise WordPressError(endpoint, f"malformed response body: {e}") from e

    def _get(self, path: str, response_type: type[T], *, query: dict[str, str] | None = None) -> T:
        "Retrieves data via WordPress REST API."

        url = self._build_url(path, query)
        endpoint = f"GET {url}"
        try:
            response = self._session.get(url, headers={"Accept": "application/json"}, timeout=self.timeout, verify=True)
        except requests.RequestException as e:
            raise WordPressError(endpoint, f"request failed: {e}") from e
        return self._response_cast(endpoint, response_type, response)

    def _post(self, path: str, body: object, response_type: type[T]) -> T:
        "Creates or updates an object via WordPress REST API."

        url = self._build_url(path)
        endpoint = f"POST {url}"
        data = object_to_json_payload(body)
        LOGGER.debug("Sending HTTP payload:\n%s", data.decode("utf-8"))
        try:
            response = self._session.post(
                url,
                data=data,
                headers={
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                },
                timeout=self.timeout,
                verify=True,
            )
        except requests.RequestException as e:
            raise WordPressError(endpoint, f"request failed: {e}") from e
        return self._response_cast(endpoint, response_type, response)

    def get_page_by_slug(self, collection: str, slug: str) -> WordPressPage | None:
        """
        Looks up a page by its slug, regardless of its publication status.

        :param collection: WordPress content type, e.g. `pages`.
        :param slug: Page slug.
        :returns: Matching page (if found), or `None`.
        """

        LOGGER.info("Looking up page with slug: %s", slug)
        pages = self._get(
            collection,
            list[WordPressPage],
            query={"slug": slug, "status": "any", "per_page": "1"},
        )
        if not pages:
            return None
        return pages[0]

    def create_page(self, collection: str, request: WordPressPageRequest) -> WordPressPage:
        """
        Creates a new page via WordPress REST API.

        :param collection: WordPress content type, e.g. `pages`.
        :param request: Page properties and content.
        """

        LOGGER.info("Creating page: %s", request.slug)
        return self._post(collection, request, WordPressPage)

    def update_page(self, collection: str, page_id: int, request: WordPressPageRequest) -> WordPressPage:
        """
        Replaces the properties and content of an existing page via WordPress REST API.

        :param collection: WordPress content type, e.g. `pages`.
        :param page_id: WordPress page ID.
        :param request: Page properties and content.
        """

        LOGGER.info("Updating page: %s (ID %d)", request.slug, page_id)
        return self._post(f"{collection}/{page_id}", request, WordPressPage)
