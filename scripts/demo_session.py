"""Drive an in-memory browser session end to end and print the view model.

Usage (from repo root):
    python scripts/demo_session.py
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path

PROJECT_DIR = Path(__file__).resolve().parents[1]
if str(PROJECT_DIR) not in sys.path:
    sys.path.insert(0, str(PROJECT_DIR))

from record_console.browser.controller import EntityBrowserController
from record_console.gateway.memory import build_demo_session
from record_console.notifications import NotificationFeed


async def _run() -> dict:
    provider, gateway = build_demo_session()
    feed = NotificationFeed()
    controller = EntityBrowserController(provider, gateway, notifier=feed, page_limit=5)

    await controller.initialize()
    await controller.next_page()
    await controller.previous_page()

    controller.set_search("tech")
    await controller.reset_and_search()

    controller.open_create()
    await controller.form().save({"Name": "Cyberdyne", "Industry": "Technology", "Rating": "Hot"})

    first_id = controller.records[0]["Id"]
    controller.open_edit(first_id)
    await controller.form().save({"Name": "Initech Labs", "Industry": "Technology", "Rating": "Warm"})

    await controller.change_entity_type("Contact")
    await controller.delete_record(controller.records[0]["Id"])

    return {
        "view": controller.view().model_dump(mode="json"),
        "notifications": [
            {"title": item.title, "variant": item.variant, "message": item.message}
            for item in feed.drain()
        ],
        "requests": [request.model_dump(mode="json") for request in gateway.requests],
    }


def main() -> None:
    print(json.dumps(asyncio.run(_run()), indent=2))


if __name__ == "__main__":
    main()
