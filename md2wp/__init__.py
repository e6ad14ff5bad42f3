"""
Publish Markdown files to WordPress.

Fetches a manifest of Markdown documents, converts Markdown content into HTML, and invokes WordPress REST API
endpoints to create or update pages, skipping documents that have not changed since the last run.
"""

from ._version import __version__

__all__ = ["__version__"]

__author__ = "md2wp contributors"
__copyright__ = "Copyright 2026, md2wp contributors"
__license__ = "MIT"
__status__ = "Production"
