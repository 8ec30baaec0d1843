"""HTTP-level tests for the browser action routes over the in-memory gateway."""

from __future__ import annotations

import logging
import unittest

from fastapi.testclient import TestClient

from record_console.config import Settings
from record_console.errors import BrowserError, BrowserErrorKind
from record_console.gateway.memory import InMemoryGateway
from record_console.main import create_app
from record_console.schemas.metadata import MetadataBootstrap


class _UnavailableProvider:
    async def fetch(self) -> MetadataBootstrap:
        raise BrowserError(BrowserErrorKind.BOOTSTRAP, "metadata endpoint down")


class BrowserRoutesTests(unittest.TestCase):
    def setUp(self) -> None:
        self._client_context = TestClient(create_app(Settings(gateway_mode="memory", page_limit=5)))
        self.client = self._client_context.__enter__()

    def tearDown(self) -> None:
        self._client_context.__exit__(None, None, None)

    def _view(self, response) -> dict:
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()["data"]

    def test_health(self) -> None:
        response = self.client.get("/health")

        self.assertEqual(response.json(), {"status": "ok"})

    def test_startup_lists_first_entity(self) -> None:
        view = self._view(self.client.get("/browser"))

        self.assertEqual(view["status"], "ready")
        self.assertEqual(view["active_entity"], "Account")
        self.assertEqual(len(view["records"]), 5)
        self.assertFalse(view["disable_next"])
        self.assertTrue(view["disable_previous"])
        self.assertEqual(view["columns"][0]["type"], "button")

    def test_paging_and_first_page_guard(self) -> None:
        view = self._view(self.client.post("/browser/next"))
        self.assertEqual(view["offset"], 5)
        self.assertEqual(len(view["records"]), 2)
        self.assertTrue(view["disable_next"])

        self.assertEqual(self.client.post("/browser/next").status_code, 409)
        view = self._view(self.client.post("/browser/previous"))
        self.assertEqual(view["offset"], 0)
        self.assertEqual(self.client.post("/browser/previous").status_code, 409)

    def test_search_trims_and_filters(self) -> None:
        view = self._view(self.client.post("/browser/search", json={"search_string": "  globex "}))

        self.assertEqual(view["search_string"], "globex")
        self.assertEqual([row["Id"] for row in view["records"]], ["acc2"])

    def test_edit_view_and_close_form(self) -> None:
        view = self._view(self.client.post("/browser/rows/acc1/edit"))
        self.assertTrue(view["modal"]["visible"])
        self.assertTrue(view["modal"]["save_visible"])
        self.assertEqual(view["modal"]["fields"][0], {"name": "Name", "label": "Name", "value": "Acme", "visibility": "visible"})

        view = self._view(self.client.post("/browser/form/close"))
        self.assertFalse(view["modal"]["visible"])

        view = self._view(self.client.post("/browser/rows/acc1/view"))
        self.assertTrue(view["modal"]["view_mode"])
        self.assertEqual(self.client.post("/browser/form/save", json={"fields": {"Name": "x"}}).status_code, 409)

    def test_edit_saves_and_refetches(self) -> None:
        self._view(self.client.post("/browser/rows/acc2/edit"))

        view = self._view(
            self.client.post(
                "/browser/form/save",
                json={"fields": {"Name": "Globex Corp", "Industry": "Energy", "Rating": "Hot"}},
            )
        )

        self.assertFalse(view["modal"]["visible"])
        self.assertEqual(view["records"][1]["Name"], "Globex Corp")
        self.assertEqual(view["records"][1]["Id"], "acc2")

    def test_create_then_notifications_are_drained(self) -> None:
        self._view(self.client.post("/browser/records/new"))
        view = self._view(
            self.client.post("/browser/form/save", json={"fields": {"Name": "Cyberdyne", "Industry": "Technology"}})
        )
        self.assertFalse(view["modal"]["visible"])

        notifications = self.client.get("/browser/notifications").json()["data"]
        self.assertEqual([item["title"] for item in notifications], ["Record was created"])
        self.assertEqual(self.client.get("/browser/notifications").json()["data"], [])

    def test_delete_row_and_missing_row(self) -> None:
        view = self._view(self.client.post("/browser/rows/acc1/delete"))
        self.assertNotIn("acc1", [row["Id"] for row in view["records"]])
        self.assertEqual(len(view["records"]), 4)

        self.assertEqual(self.client.post("/browser/rows/acc1/delete").status_code, 404)
        self.assertEqual(self.client.post("/browser/rows/acc2/clone").status_code, 422)

    def test_entity_switch(self) -> None:
        self.client.post("/browser/search", json={"search_string": "acme"})

        view = self._view(self.client.post("/browser/entity", json={"name": "Contact"}))
        self.assertEqual(view["active_entity"], "Contact")
        self.assertEqual(view["search_string"], "")
        self.assertEqual(len(view["records"]), 2)

        self.assertEqual(self.client.post("/browser/entity", json={"name": "Lead"}).status_code, 409)

    def test_save_without_open_form_is_conflict(self) -> None:
        response = self.client.post("/browser/form/save", json={"fields": {"Name": "x"}})

        self.assertEqual(response.status_code, 409)


class DegradedBrowserRoutesTests(unittest.TestCase):
    def test_bootstrap_failure_is_reported_once(self) -> None:
        app = create_app(
            Settings(gateway_mode="http"),
            metadata_provider=_UnavailableProvider(),
            gateway=InMemoryGateway(),
        )
        with TestClient(app) as client:
            view = client.get("/browser").json()["data"]
            self.assertEqual(view["status"], "degraded")
            self.assertEqual(view["records"], [])
            self.assertEqual(client.post("/browser/next").status_code, 409)

            notifications = client.get("/browser/notifications").json()["data"]
            self.assertEqual(
                notifications,
                [{"title": "ERROR", "variant": "error", "message": "metadata endpoint down"}],
            )


class AppLoggingTests(unittest.TestCase):
    def setUp(self) -> None:
        self.root = logging.getLogger()
        self.previous_level = self.root.level
        self.addCleanup(self.root.setLevel, self.previous_level)

    def test_log_level_applies_to_root_logger(self) -> None:
        create_app(Settings(gateway_mode="memory", log_level="debug"))

        self.assertEqual(self.root.level, logging.DEBUG)
        self.assertTrue(logging.getLogger("record_console.browser.controller").isEnabledFor(logging.DEBUG))


if __name__ == "__main__":
    unittest.main()
