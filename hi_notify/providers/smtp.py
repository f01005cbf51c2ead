"""SMTP (implicit TLS) notification provider."""

from __future__ import annotations

import logging
import mimetypes
import smtplib
import ssl
from contextlib import contextmanager
from email.message import EmailMessage
from pathlib import Path
from typing import Iterator, Optional

from hi_common.errors import DeliveryError
from hi_notify.base import NotificationContext, NotificationProvider
from hi_notify.credentials import MailSecret

logger = logging.getLogger(__name__)

_MAIL_LOG = logging.getLogger("hi_notify.mail_log")
_MAIL_LOG.setLevel(logging.INFO)


@contextmanager
def _mail_log(path: Optional[Path]) -> Iterator[logging.Logger]:
    """Mirror this delivery attempt into a per-run log file."""
    if path is None:
        yield _MAIL_LOG
        return
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    _MAIL_LOG.addHandler(handler)
    try:
        yield _MAIL_LOG
    finally:
        _MAIL_LOG.removeHandler(handler)
        handler.close()


class SmtpProvider(NotificationProvider):
    """Submits the message over SMTPS (TLS from the first byte, no STARTTLS)."""

    def __init__(
        self,
        server: str,
        port: int,
        user: str,
        sender: Optional[str] = None,
        ca_file: Optional[Path] = None,
        timeout_seconds: float = 30.0,
    ) -> None:
        self.server = server
        self.port = port
        self.user = user
        self.sender = sender or user
        self.ca_file = ca_file
        self.timeout = timeout_seconds

    def build_message(self, context: NotificationContext) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = context.recipient
        message["Subject"] = context.subject
        message.set_content(context.body)
        for path in context.attachments:
            ctype, encoding = mimetypes.guess_type(path.name)
            if ctype is None or encoding is not None:
                ctype = "application/gzip" if path.name.endswith(".gz") else "application/octet-stream"
            maintype, subtype = ctype.split("/", 1)
            message.add_attachment(
                path.read_bytes(), maintype=maintype, subtype=subtype, filename=path.name
            )
        return message

    def _ssl_context(self) -> ssl.SSLContext:
        if self.ca_file is not None:
            return ssl.create_default_context(cafile=str(self.ca_file))
        return ssl.create_default_context()

    def _failure(self, message: str, context: NotificationContext, exc: Exception) -> DeliveryError:
        return DeliveryError(
            message,
            context={
                "server": self.server,
                "port": self.port,
                "account": self.user,
                "recipient": context.recipient,
                "log": context.log_path,
            },
            cause=exc,
        )

    def send(self, context: NotificationContext, secret: MailSecret) -> None:
        with _mail_log(context.log_path) as mail_log:
            mail_log.info(
                "connecting to %s:%s as %s (recipient %s, %d attachment(s))",
                self.server,
                self.port,
                self.user,
                context.recipient,
                len(context.attachments),
            )
            try:
                message = self.build_message(context)
            except OSError as exc:
                mail_log.error("cannot read attachment: %s", exc)
                raise self._failure(f"Cannot read attachment: {exc}", context, exc) from exc

            try:
                with smtplib.SMTP_SSL(
                    self.server,
                    self.port,
                    timeout=self.timeout,
                    context=self._ssl_context(),
                ) as client:
                    client.login(self.user, secret.reveal())
                    client.send_message(message)
            except smtplib.SMTPAuthenticationError as exc:
                mail_log.error("authentication failed: %s", exc)
                raise self._failure("SMTP authentication failed", context, exc) from exc
            except (smtplib.SMTPException, ssl.SSLError, OSError) as exc:
                mail_log.error("delivery failed: %s", exc)
                raise self._failure(f"Mail delivery failed: {exc}", context, exc) from exc

            mail_log.info("message accepted for %s", context.recipient)
        logger.info("Mail sent to %s via %s:%s", context.recipient, self.server, self.port)
