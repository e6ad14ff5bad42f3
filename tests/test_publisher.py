"""
Publish Markdown files to WordPress.

Copyright 2026, md2wp contributors

:see: https://developer.wordpress.org/rest-api/
"""

import logging
import unittest

from md2wp.api import WordPressSession
from md2wp.api_types import WordPressStatus
from md2wp.environment import PublishError
from md2wp.extra import override
from md2wp.publisher import Publisher, SlugIndex
from tests.utility import API_URL, FakeWordPressServer, TypedTestCase

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(funcName)s [%(lineno)d] - %(message)s",
)


class TestPublisher(TypedTestCase):
    server: FakeWordPressServer
    publisher: Publisher

    @override
    def setUp(self) -> None:
        self.server = FakeWordPressServer(fail_slugs=["broken"])
        session = WordPressSession(self.server, api_url=API_URL, timeout=30.0)  # type: ignore[arg-type]
        self.publisher = Publisher(session, "pages")

    def test_create(self) -> None:
        page = self.publisher.publish("intro", "Introduction", "<p>Body</p>", order=3)

        self.assertEqual(self.server.lookups("intro"), 1)
        self.assertEqual(self.server.writes(), 1)
        self.assertEqual(self.server.calls[-1], ("POST", f"{API_URL}pages"))

        stored = self.server.pages[page.id]
        self.assertEqual(stored["slug"], "intro")
        self.assertEqual(stored["title"], {"rendered": "Introduction"})
        self.assertEqual(stored["parent"], 0)
        self.assertEqual(stored["menu_order"], 3)
        self.assertEqual(stored["status"], "publish")

    def test_update(self) -> None:
        page_id = self.server.add_page("intro")

        page = self.publisher.publish("intro", "Introduction", "<p>New body</p>")

        self.assertEqual(page.id, page_id)
        self.assertEqual(self.server.calls[-1], ("POST", f"{API_URL}pages/{page_id}"))
        self.assertEqual(len(self.server.pages), 1)

        # drafts are published on update
        self.assertEqual(page.status, WordPressStatus.PUBLISH)
        self.assertEqual(self.server.pages[page_id]["content"]["rendered"], "<p>New body</p>")

    def test_parent(self) -> None:
        parent_id = self.server.add_page("intro")

        page = self.publisher.publish("child", "Child", "<p>Body</p>", parent_slug="intro")

        self.assertEqual(page.parent, parent_id)
        self.assertEqual(self.server.pages[page.id]["parent"], parent_id)

    def test_missing_parent(self) -> None:
        with self.assertLogs("md2wp.publisher", level=logging.WARNING) as cm:
            page = self.publisher.publish("child", "Child", "<p>Body</p>", parent_slug="nowhere")

        self.assertIn("nowhere", "\n".join(cm.output))
        self.assertEqual(page.parent, 0)

    def test_shared_parent_lookup(self) -> None:
        parent_id = self.server.add_page("intro")

        first = self.publisher.publish("first", "First", "<p>1</p>", parent_slug="intro", order=1)
        second = self.publisher.publish("second", "Second", "<p>2</p>", parent_slug="intro", order=2)

        self.assertEqual(first.parent, parent_id)
        self.assertEqual(second.parent, parent_id)
        self.assertEqual(self.server.lookups("intro"), 1)

    def test_index_after_write(self) -> None:
        page = self.publisher.publish("intro", "Introduction", "<p>Body</p>")
        self.assertEqual(self.server.lookups(), 1)

        # slug written in this run resolves without querying
        resolved = self.publisher.resolve_slug("intro")
        self.assertIsNotNone(resolved)
        assert resolved is not None
        self.assertEqual(resolved.id, page.id)

        child = self.publisher.publish("child", "Child", "<p>Body</p>", parent_slug="intro")
        self.assertEqual(child.parent, page.id)
        self.assertEqual(self.server.lookups("intro"), 1)

        # publishing the same slug again updates the page written before
        again = self.publisher.publish("intro", "Introduction", "<p>Changed</p>")
        self.assertEqual(again.id, page.id)
        self.assertEqual(self.server.calls[-1], ("POST", f"{API_URL}pages/{page.id}"))
        self.assertEqual(self.server.lookups("intro"), 1)

    def test_absent_slug_is_remembered(self) -> None:
        self.assertIsNone(self.publisher.resolve_slug("missing"))
        self.assertIsNone(self.publisher.resolve_slug("missing"))
        self.assertEqual(self.server.lookups("missing"), 1)

    def test_failure(self) -> None:
        with self.assertRaises(PublishError) as cm:
            self.publisher.publish("broken", "Broken", "<p>Body</p>")

        self.assertEqual(cm.exception.slug, "broken")
        self.assertEqual(cm.exception.endpoint, f"POST {API_URL}pages")
        self.assertIn("internal_server_error", str(cm.exception))

        # no page has been recorded for the slug
        self.assertIsNone(self.publisher.index.get("broken"))
        self.assertEqual(self.server.pages, {})

    def test_failed_update_keeps_index(self) -> None:
        page_id = self.server.add_page("broken")
        existing = self.publisher.resolve_slug("broken")
        assert existing is not None

        with self.assertRaises(PublishError) as cm:
            self.publisher.publish("broken", "Broken", "<p>Body</p>")
        self.assertEqual(cm.exception.endpoint, f"POST {API_URL}pages/{page_id}")

        self.assertIs(self.publisher.index.get("broken"), existing)


class TestSlugIndex(TypedTestCase):
    def test_index(self) -> None:
        index = SlugIndex()
        self.assertNotIn("intro", index)
        self.assertEqual(len(index), 0)

        index.add("intro", None)
        self.assertIn("intro", index)
        self.assertIsNone(index.get("intro"))


if __name__ == "__main__":
    unittest.main()
