"""
Publish Markdown files to WordPress.

Copyright 2026, md2wp contributors

:see: https://developer.wordpress.org/rest-api/
"""

import logging
import os
import typing
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse

import orjson

from .serializer import JsonType, json_loads

LOGGER = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
DEFAULT_FINGERPRINT_FILE = "md2wp-hash.txt"


class SynchronizationError(Exception):
    "Base class for errors raised while synchronizing a manifest with WordPress."


class ConfigError(SynchronizationError, ValueError):
    "Raised when the configuration is missing, unreadable or incomplete."


class ManifestFetchError(SynchronizationError):
    "Raised when the manifest cannot be fetched or decoded."


class DocumentFetchError(SynchronizationError):
    "Raised when a Markdown source document cannot be fetched."


class DocumentError(SynchronizationError):
    "Raised when a Markdown source document cannot be converted into HTML."


class PublishError(SynchronizationError):
    """
    Raised when WordPress rejects a page, or the request fails in transport.

    :param slug: Slug of the page being published.
    :param endpoint: REST API endpoint that has been invoked.
    :param reason: Human-readable explanation.
    """

    slug: str
    endpoint: str

    def __init__(self, slug: str, endpoint: str, reason: str) -> None:
        super().__init__(f"failed to publish page '{slug}' via {endpoint}: {reason}")
        self.slug = slug
        self.endpoint = endpoint


class PersistenceError(SynchronizationError):
    "Raised when the fingerprint store cannot be read or written."


class WordPressError(RuntimeError):
    """
    Raised when a WordPress REST API call fails.

    :param endpoint: HTTP method and URL of the failed call.
    :param reason: Human-readable explanation.
    """

    endpoint: str

    def __init__(self, endpoint: str, reason: str) -> None:
        super().__init__(f"{endpoint}: {reason}")
        self.endpoint = endpoint
        self.reason = reason


def _validate_domain(domain: str) -> str:
    "Normalizes a host name or site URL into a site URL with no trailing slash."

    if not domain.startswith(("http://", "https://")):
        domain = f"https://{domain}"

    try:
        scheme, netloc, path, params, query, fragment = urlparse(domain)
    except ValueError as e:
        raise ConfigError(f"WordPress domain is not a valid URL: {domain}") from e
    if not netloc:
        raise ConfigError(f"WordPress domain has no host name: {domain}")
    if params or query or fragment:
        raise ConfigError("WordPress domain must not have parameters, query string or fragment")

    return f"{scheme}://{netloc}{path.rstrip('/')}"


def _validate_collection(collection: str) -> str:
    collection = collection.strip("/")
    if not collection or "/" in collection:
        raise ConfigError(f"WordPress content type must be a single path segment: {collection}")
    return collection


# configuration file key mapped to environment variable consulted when the key is missing or empty
_REQUIRED_KEYS = {
    "source_url": "MD2WP_SOURCE_URL",
    "wordpress_domain": "WORDPRESS_DOMAIN",
    "wordpress_type": "WORDPRESS_TYPE",
    "username": "WORDPRESS_USER_NAME",
    "apikey": "WORDPRESS_API_KEY",
}


def _get_string(data: dict[str, JsonType], key: str, env: str | None = None) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ConfigError(f"expected: string value for configuration key `{key}`")
    if not value and env is not None:
        value = os.getenv(env)
    return value or None


@dataclass(frozen=True)
class SynchronizerConfiguration:
    """
    Settings for a single synchronization run.

    :param source_url: Location of the JSON manifest (URL or local path).
    :param site_url: WordPress site URL, e.g. `https://example.com`.
    :param collection: WordPress content type to publish into, e.g. `pages`.
    :param user_name: WordPress user name.
    :param api_key: WordPress application password.
    :param timeout: Timeout for a single HTTP request [s].
    :param fingerprint_path: Local file that holds content fingerprints between runs.
    """

    source_url: str
    site_url: str
    collection: str
    user_name: str
    api_key: str
    timeout: float = DEFAULT_TIMEOUT
    fingerprint_path: Path = Path(DEFAULT_FINGERPRINT_FILE)

    @property
    def api_url(self) -> str:
        "Root URL of the WordPress REST API."

        return f"{self.site_url}/wp-json/wp/v2/"


def load_configuration(path: Path, *, fingerprint_path: Path | None = None, timeout: float | None = None) -> SynchronizerConfiguration:
    """
    Reads synchronization settings from a JSON configuration file.

    Keys that are missing or empty in the file are looked up in environment variables.

    :param path: Path to the JSON configuration file.
    :param fingerprint_path: Overrides the location of the fingerprint store.
    :param timeout: Overrides the per-request timeout [s].
    :raises ConfigError: Raised when the file is unreadable or a required setting is missing.
    """

    LOGGER.info("Loading configuration: %s", path)
    try:
        with open(path, "rb") as f:
            data = json_loads(f.read())
    except OSError as e:
        raise ConfigError(f"unable to read configuration file {path}: {e}") from e
    except orjson.JSONDecodeError as e:
        raise ConfigError(f"error decoding configuration file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"expected: JSON object in configuration file {path}")

    values = {key: _get_string(data, key, env) for key, env in _REQUIRED_KEYS.items()}
    missing = [key for key, value in values.items() if not value]
    if missing:
        raise ConfigError(f"missing required configuration parameters: {', '.join(missing)}")

    if timeout is None:
        opt_timeout = data.get("timeout", DEFAULT_TIMEOUT)
        if isinstance(opt_timeout, bool) or not isinstance(opt_timeout, (int, float)):
            raise ConfigError("expected: number for configuration key `timeout`")
        timeout = float(opt_timeout)
    if timeout <= 0:
        raise ConfigError("timeout must be positive")

    if fingerprint_path is None:
        opt_fingerprint_file = _get_string(data, "fingerprint_file")
        if opt_fingerprint_file is not None:
            fingerprint_path = Path(opt_fingerprint_file)
        else:
            fingerprint_path = Path(DEFAULT_FINGERPRINT_FILE)

        # relative paths are interpreted relative to the configuration file
        if not fingerprint_path.is_absolute():
            fingerprint_path = path.parent / fingerprint_path

    return SynchronizerConfiguration(
        source_url=typing.cast(str, values["source_url"]),
        site_url=_validate_domain(typing.cast(str, values["wordpress_domain"])),
        collection=_validate_collection(typing.cast(str, values["wordpress_type"])),
        user_name=typing.cast(str, values["username"]),
        api_key=typing.cast(str, values["apikey"]),
        timeout=timeout,
        fingerprint_path=fingerprint_path,
    )
