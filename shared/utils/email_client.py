import logging
import smtplib
import time
from contextlib import contextmanager
from email.message import EmailMessage
from typing import List, Optional

logger = logging.getLogger(__name__)


class EmailClient:
    """SMTP client for alert mails, retries transient failures."""

    def __init__(
        self,
        smtp_host: str,
        smtp_port: int,
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_ssl: bool = False,
        max_retries: int = 3,
        retry_delay: int = 3,
        timeout: float = 10
    ):
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.username = username
        self.password = password
        self.use_ssl = use_ssl
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.timeout = timeout

    @contextmanager
    def _connection(self):
        if self.use_ssl:
            server = smtplib.SMTP_SSL(
                self.smtp_host, self.smtp_port, timeout=self.timeout)
        else:
            server = smtplib.SMTP(
                self.smtp_host, self.smtp_port, timeout=self.timeout)
        try:
            if not self.use_ssl:
                server.ehlo()
                # STARTTLS only when offered
                if server.has_extn("starttls"):
                    server.starttls()
                    server.ehlo()
            if self.username:
                server.login(self.username, self.password or "")
            yield server
        finally:
            try:
                server.quit()
            except smtplib.SMTPException as e:
                logger.warning("Error closing SMTP connection to %s: %s",
                               self.smtp_host, e)

    @staticmethod
    def build_message(
        sender: str,
        recipients: List[str],
        subject: str,
        text_body: str,
        html_body: Optional[str] = None
    ) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = sender
        msg["To"] = ", ".join(recipients)
        msg["Subject"] = subject
        msg.set_content(text_body or "")
        if html_body:
            msg.add_alternative(html_body, subtype="html")
        return msg

    def send_email(
        self,
        sender: str,
        recipients: List[str],
        subject: str,
        text_body: str,
        html_body: Optional[str] = None
    ) -> bool:
        """Send one message, returns False once every attempt failed."""
        msg = self.build_message(sender, recipients, subject, text_body, html_body)

        for attempt in range(1, self.max_retries + 1):
            try:
                with self._connection() as server:
                    server.send_message(msg)
                logger.info("Email '%s' sent to %s", subject, ", ".join(recipients))
                return True
            except smtplib.SMTPAuthenticationError:
                logger.error("SMTP authentication failed for user '%s'", self.username)
                break
            except (smtplib.SMTPException, OSError) as e:
                logger.error("Email attempt %s/%s to %s failed: %s",
                             attempt, self.max_retries, self.smtp_host, e)
                if attempt < self.max_retries:
                    time.sleep(self.retry_delay)

        return False
