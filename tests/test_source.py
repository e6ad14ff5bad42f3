"""
Publish Markdown files to WordPress.

Copyright 2026, md2wp contributors

:see: https://developer.wordpress.org/rest-api/
"""

import unittest
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest.mock import MagicMock

import requests

from md2wp.environment import DocumentFetchError
from md2wp.source import SourceReader
from tests.utility import TypedTestCase, make_response


class TestSourceReader(TypedTestCase):
    def test_read_url(self) -> None:
        session = MagicMock()
        session.get.return_value = make_response(200, text="# Título\nBody", url="http://x/a.md")
        reader = SourceReader(timeout=5.0, session=session)

        self.assertEqual(reader.read_text("http://x/a.md"), "# Título\nBody")
        session.get.assert_called_once_with("http://x/a.md", timeout=5.0)

    def test_read_url_not_found(self) -> None:
        session = MagicMock()
        session.get.return_value = make_response(404, text="Not Found", url="http://x/a.md")
        reader = SourceReader(session=session)

        with self.assertRaises(DocumentFetchError):
            reader.read_text("http://x/a.md")

    def test_read_url_transport_failure(self) -> None:
        session = MagicMock()
        session.get.side_effect = requests.Timeout("timed out")
        reader = SourceReader(session=session)

        with self.assertRaises(DocumentFetchError) as cm:
            reader.read_text("https://x/a.md")
        self.assertIn("timed out", str(cm.exception))

    def test_read_file(self) -> None:
        with TemporaryDirectory() as tmp_dir:
            path = Path(tmp_dir) / "a.md"
            path.write_text("# Title\nBody", encoding="utf-8")

            with SourceReader() as reader:
                self.assertEqual(reader.read_text(str(path)), "# Title\nBody")
                self.assertEqual(reader.read_text(path.as_uri()), "# Title\nBody")

                with self.assertRaises(DocumentFetchError):
                    reader.read_text(str(Path(tmp_dir) / "missing.md"))

    def test_read_invalid_location(self) -> None:
        session = MagicMock()
        reader = SourceReader(session=session)

        with self.assertRaises(DocumentFetchError) as cm:
            reader.read_text("http://[broken/a.md")
        self.assertIn("http://[broken/a.md", str(cm.exception))

        with self.assertRaises(DocumentFetchError):
            reader.read_text("docs/a\x00.md")

        session.get.assert_not_called()

    def test_read_binary(self) -> None:
        with TemporaryDirectory() as tmp_dir:
            path = Path(tmp_dir) / "image.png"
            path.write_bytes(b"\x89PNG\r\n\x1a\n\xff\xfe")

            with SourceReader() as reader:
                with self.assertRaises(DocumentFetchError):
                    reader.read_text(str(path))


if __name__ == "__main__":
    unittest.main()
