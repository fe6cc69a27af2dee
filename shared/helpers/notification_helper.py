import logging
from typing import Dict, Optional, Protocol

from pydantic import BaseModel, ConfigDict

from ..core.config import settings
from ..utils.email_client import EmailClient
from ..utils.webhook_client import WebhookClient

logger = logging.getLogger(__name__)

EMAIL_CHANNEL = "email"
TEAMS_CHANNEL = "teams"
SLACK_CHANNEL = "slack"


class NotificationEvent(BaseModel):
    """Low-stock alert raised by an outbound movement."""

    model_config = ConfigDict(frozen=True)

    item_id: int
    item_name: str
    stock: int
    min_stock: int
    alert_email: Optional[str] = None
    webhook_teams: Optional[str] = None
    webhook_slack: Optional[str] = None

    @property
    def subject(self) -> str:
        return f"[Low stock] {self.item_name}"

    @property
    def message(self) -> str:
        return (
            f"Item {self.item_name} reached a critical level of {self.stock} "
            f"unit(s) (minimum {self.min_stock})."
        )

    def destinations(self) -> Dict[str, str]:
        """Configured channel -> target, skipping blank entries."""
        candidates = (
            (EMAIL_CHANNEL, self.alert_email),
            (TEAMS_CHANNEL, self.webhook_teams),
            (SLACK_CHANNEL, self.webhook_slack),
        )
        return {channel: target.strip() for channel, target in candidates
                if target and target.strip()}


class AlertSender(Protocol):
    def send(self, event: NotificationEvent, destination: str) -> bool:
        ...


class EmailAlertSender:
    def __init__(self, client: Optional[EmailClient], sender: str):
        self.client = client
        self.sender = sender

    def send(self, event: NotificationEvent, destination: str) -> bool:
        if self.client is None:
            logger.warning(
                "No SMTP host configured, low stock email for '%s' not sent", event.item_name)
            return False
        html_body = (
            f"<p>{event.message}</p>"
            f"<p>Please restock <strong>{event.item_name}</strong>.</p>"
        )
        return self.client.send_email(
            sender=self.sender,
            recipients=[destination],
            subject=event.subject,
            text_body=event.message,
            html_body=html_body,
        )


class TeamsWebhookSender:
    def __init__(self, client: WebhookClient):
        self.client = client

    def send(self, event: NotificationEvent, destination: str) -> bool:
        payload = {
            "@type": "MessageCard",
            "@context": "http://schema.org/extensions",
            "themeColor": "D9534F",
            "summary": event.subject,
            "title": event.subject,
            "text": event.message,
        }
        return self.client.post_json(destination, payload)


class SlackWebhookSender:
    def __init__(self, client: WebhookClient):
        self.client = client

    def send(self, event: NotificationEvent, destination: str) -> bool:
        payload = {
            "text": f":warning: {event.message}",
        }
        return self.client.post_json(destination, payload)


class LowStockNotifier:
    """Best-effort fan-out of a NotificationEvent to every configured channel.

    One attempt per channel. A failing channel is logged and never stops the
    others, and nothing is raised back to the caller.
    """

    def __init__(self, senders: Dict[str, AlertSender]):
        self.senders = senders

    def notify(self, event: NotificationEvent) -> Dict[str, bool]:
        results: Dict[str, bool] = {}
        destinations = event.destinations()
        if not destinations:
            logger.info(
                "Low stock on '%s' but no alert destination is configured", event.item_name)
            return results

        for channel, destination in destinations.items():
            sender = self.senders.get(channel)
            if sender is None:
                logger.warning("No sender registered for channel '%s'", channel)
                results[channel] = False
                continue
            try:
                results[channel] = bool(sender.send(event, destination))
            except Exception:
                logger.exception(
                    "Low stock alert via %s for '%s' raised", channel, event.item_name)
                results[channel] = False
                continue

            if results[channel]:
                logger.info("Low stock alert for '%s' sent via %s",
                            event.item_name, channel)
            else:
                logger.error("Low stock alert for '%s' via %s failed",
                             event.item_name, channel)
        return results


def build_low_stock_notifier(
    smtp_host: Optional[str] = None,
    smtp_port: Optional[int] = None,
    smtp_user: Optional[str] = None,
    smtp_pass: Optional[str] = None,
) -> LowStockNotifier:
    """Wire the real senders, falling back to the environment SMTP settings."""
    email_client = None
    if smtp_host:
        email_client = EmailClient(
            smtp_host=smtp_host,
            smtp_port=smtp_port or settings.SMTP_PORT,
            username=smtp_user,
            password=smtp_pass,
            use_ssl=settings.SMTP_USE_SSL,
        )
    elif settings.SMTP_HOST:
        email_client = EmailClient(
            smtp_host=settings.SMTP_HOST,
            smtp_port=settings.SMTP_PORT,
            username=settings.SMTP_USERNAME,
            password=settings.SMTP_PASSWORD,
            use_ssl=settings.SMTP_USE_SSL,
        )

    webhook_client = WebhookClient(timeout=settings.WEBHOOK_TIMEOUT_SECONDS)
    return LowStockNotifier({
        EMAIL_CHANNEL: EmailAlertSender(email_client, settings.EMAIL_SENDER),
        TEAMS_CHANNEL: TeamsWebhookSender(webhook_client),
        SLACK_CHANNEL: SlackWebhookSender(webhook_client),
    })
