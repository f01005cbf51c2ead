"""Turn a finished inventory run into a handover mail and deliver it."""

from __future__ import annotations

import logging
import socket
from pathlib import Path
from typing import Callable

from hi_common.errors import DeliveryError, normalize_context
from hi_notify.base import NotificationContext, NotificationProvider
from hi_notify.body import MailBodyContext, build_subject, render_mail_body
from hi_notify.credentials import scoped_secret
from hi_notify.providers.smtp import SmtpProvider
from hi_runner.models.config import InventoryConfig, MailConfig
from hi_runner.models.results import RunOutcome
from hi_runner.services import parsers
from hi_runner.services.probes import NETWORK_FILE, SERIALS_FILE
from hi_runner.services.run_dir import RunDirectory

logger = logging.getLogger(__name__)

PasswordProvider = Callable[[], str]


def build_provider(mail: MailConfig) -> SmtpProvider:
    return SmtpProvider(
        server=mail.server,
        port=mail.port,
        user=mail.user,
        sender=mail.from_address,
        ca_file=mail.ca_file,
        timeout_seconds=mail.timeout_seconds,
    )


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError:
        return ""


class HandoverMailer:
    """Compose the handover mail for a run and submit it once."""

    def __init__(
        self,
        config: InventoryConfig,
        *,
        provider: NotificationProvider | None = None,
        fqdn: Callable[[], str] = socket.getfqdn,
    ) -> None:
        self.config = config
        self.provider = provider or build_provider(config.mail)
        self._fqdn = fqdn

    def build_notification(self, outcome: RunOutcome) -> NotificationContext:
        assert outcome.selection is not None and outcome.summary_path is not None
        run_dir = RunDirectory(outcome.run_dir, outcome.host, outcome.timestamp)
        serials = parsers.parse_dmidecode_serials(_read(run_dir.path / SERIALS_FILE))
        body = render_mail_body(
            MailBodyContext(
                timestamp=outcome.timestamp,
                host=outcome.host,
                fqdn=self._fqdn(),
                addresses=parsers.parse_ip_brief(_read(run_dir.path / NETWORK_FILE)),
                system_serial=serials.system,
                board_serial=serials.baseboard,
                attachment_mode=outcome.selection.mode.value,
                full_size=outcome.full_archive.size_bytes if outcome.full_archive else 0,
                light_size=outcome.light_archive.size_bytes if outcome.light_archive else 0,
                limit=self.config.max_attach_bytes,
                summary_text=_read(outcome.summary_path),
                excerpt_lines=self.config.summary_excerpt_lines,
            )
        )
        return NotificationContext(
            recipient=self.config.mail.recipient,
            subject=build_subject(outcome.host, outcome.timestamp),
            body=body,
            attachments=outcome.selection.files,
            log_path=run_dir.mail_log_path,
        )

    def deliver(self, outcome: RunOutcome, password_provider: PasswordProvider) -> None:
        """Send the mail for ``outcome``.

        The password is requested only now and wiped once the SMTP session
        ends. On DeliveryError the run directory and attachment mode are
        added to the error context; the artifacts are left untouched.
        """
        context = self.build_notification(outcome)
        logger.info("Sending mail to %s", context.recipient)
        try:
            with scoped_secret(password_provider()) as secret:
                self.provider.send(context, secret)
        except DeliveryError as exc:
            exc.context.update(
                normalize_context(
                    {
                        "run_dir": outcome.run_dir,
                        "attachment_mode": outcome.selection.mode.value
                        if outcome.selection
                        else None,
                    }
                )
            )
            raise
        outcome.delivered = True
