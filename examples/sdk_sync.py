#!/usr/bin/env python3
"""
Sync API example: pull every published item once, then fetch deltas.
"""

import json
from pathlib import Path

from content_delivery import PublishType, stack

STATE_FILE = Path("sync_state.json")


def run_sync(delivery):
    """Follow pagination tokens until the run hands out a sync token."""
    state = json.loads(STATE_FILE.read_text()) if STATE_FILE.exists() else {}

    if state.get("sync_token"):
        page = delivery.sync_token(state["sync_token"]).result(timeout=60)
    else:
        page = delivery.sync_with(publish_type=PublishType.ENTRY_PUBLISHED).result(timeout=60)

    items = 0
    while page is not None:
        items += len(page.items)
        for item in page.items:
            print(f"  {item.get('type')}: {item.get('data', {}).get('uid')}")

        if not page.pagination_token:
            break
        page = delivery.sync_pagination_token(page.pagination_token).result(timeout=60)

    if page is None:
        print("❌ Sync stopped early; see the log for the error")
        return

    STATE_FILE.write_text(json.dumps({"sync_token": page.sync_token}))
    print(f"✓ Synced {items} items, next token saved to {STATE_FILE}")


if __name__ == "__main__":
    with stack() as delivery:
        run_sync(delivery)
