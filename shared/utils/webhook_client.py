import logging
from typing import Optional

import requests

logger = logging.getLogger(__name__)


class WebhookClient:
    """Posts JSON payloads to incoming-webhook URLs (Teams, Slack)."""

    def __init__(self, timeout: float = 5.0, session: Optional[requests.Session] = None):
        self.timeout = timeout
        self.session = session or requests.Session()

    def post_json(self, url: str, payload: dict) -> bool:
        try:
            response = self.session.post(url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Webhook request to {url} failed: {e}")
            return False

        if not response.ok:
            logger.error(
                f"Webhook {url} answered {response.status_code}: {response.text[:200]}")
            return False
        return True
