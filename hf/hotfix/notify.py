"""Slack incoming-webhook notification for a new hotfix branch."""

from __future__ import annotations

from typing import Any

from hf.core.result import Err, Ok, Result
from hf.hotfix.errors import DeliveryError, HotfixError
from hf.hotfix.model import HotfixNames
from hf.net.http import HttpClient

BUTTON_TEXT = "Open issue"
BUTTON_ACTION_ID = "button-action"


def notification_header(names: HotfixNames) -> str:
    return f"[{names.hotfix_tag}] Hotfix created"


def build_notification(names: HotfixNames, issue_url: str) -> dict[str, Any]:
    """Block Kit payload: header, section text, and a button to the issue."""
    return {
        "blocks": [
            {
                "type": "header",
                "text": {
                    "type": "plain_text",
                    "text": notification_header(names),
                },
            },
            {
                "type": "section",
                "text": {
                    "type": "mrkdwn",
                    "text": f"Please commit your fixes to {names.branch}.",
                },
                "accessory": {
                    "type": "button",
                    "text": {"type": "plain_text", "text": BUTTON_TEXT},
                    "url": issue_url,
                    "action_id": BUTTON_ACTION_ID,
                },
            },
        ]
    }


def notify(
    http: HttpClient,
    *,
    webhook_url: str,
    names: HotfixNames,
    issue_url: str,
) -> Result[None, HotfixError]:
    """Deliver one notification. Any failure is a DeliveryError; no retry."""
    result = http.post_json(webhook_url, build_notification(names, issue_url))
    if isinstance(result, Err):
        e = result.error
        # The webhook URL is a credential: message only, never the URL.
        reason = e.message if not e.detail else f"{e.message}: {e.detail}"
        return Err(DeliveryError(status=e.status, message=f"webhook delivery failed: {reason}"))

    status = result.value.status
    if not 200 <= status < 300:
        return Err(DeliveryError(status=status, message=f"webhook answered HTTP {status}"))
    return Ok(None)
