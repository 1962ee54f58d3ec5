"""Post Auto Scaling events to a Slack channel."""

import json
import os
from typing import Any

import urllib3

http = urllib3.PoolManager(timeout=urllib3.Timeout(connect=2.0, read=5.0))


class NotificationError(Exception):
  """Slack rejected the message."""


def format_message(event: dict[str, Any]) -> str:
  """Describe an Auto Scaling EventBridge event in one line."""
  detail = event.get("detail", {})
  return (
    f"From {event.get('source')} at {detail.get('StartTime')}: "
    f"{detail.get('Description')}"
  )


def post_to_slack(event: dict[str, Any], context: Any) -> None:
  """Lambda entry point."""
  webhook_url = os.environ["SLACK_WEBHOOK_URL"]
  text = format_message(event)

  response = http.request(
    "POST",
    webhook_url,
    body=json.dumps({"text": text}).encode("utf-8"),
    headers={"Content-Type": "application/json"},
  )

  if not 200 <= response.status < 300:
    raise NotificationError(
      f"Slack returned {response.status}: {response.data.decode('utf-8', 'replace')}"
    )

  print(f"Posted to Slack: {text}")
