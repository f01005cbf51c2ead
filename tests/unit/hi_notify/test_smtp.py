"""SMTPS provider with the network layer patched out."""

from __future__ import annotations

import smtplib
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from hi_common.errors import DeliveryError
from hi_notify.base import NotificationContext
from hi_notify.credentials import MailSecret
from hi_notify.providers import smtp as smtp_module
from hi_notify.providers.smtp import SmtpProvider

pytestmark = pytest.mark.unit_notify


@pytest.fixture
def smtp_client(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    client = MagicMock()
    factory = MagicMock()
    factory.return_value.__enter__.return_value = client
    monkeypatch.setattr(smtp_module.smtplib, "SMTP_SSL", factory)
    client.factory = factory
    return client


@pytest.fixture
def context(tmp_path: Path) -> NotificationContext:
    summary = tmp_path / "ZZ_HANDOVER_SUMMARY.txt"
    summary.write_text("summary\n")
    archive = tmp_path / "handover_node1_2024-05-01T120304Z.tar.gz"
    archive.write_bytes(b"\x1f\x8b fake")
    return NotificationContext(
        recipient="ops@example.com",
        subject="[Handover] node1 | 2024-05-01T120304Z",
        body="hello\n",
        attachments=(summary, archive),
        log_path=tmp_path / "mail.log",
    )


def _provider() -> SmtpProvider:
    return SmtpProvider(
        server="mail.example.com",
        port=465,
        user="handover@example.com",
        timeout_seconds=5.0,
    )


def test_build_message_attaches_files(context: NotificationContext) -> None:
    message = _provider().build_message(context)

    assert message["From"] == "handover@example.com"
    assert message["To"] == "ops@example.com"
    assert message["Subject"] == context.subject
    parts = {part.get_filename(): part.get_content_type() for part in message.iter_attachments()}
    assert parts == {
        "ZZ_HANDOVER_SUMMARY.txt": "text/plain",
        "handover_node1_2024-05-01T120304Z.tar.gz": "application/gzip",
    }


def test_send_logs_in_and_submits(
    smtp_client: MagicMock, context: NotificationContext
) -> None:
    _provider().send(context, MailSecret("pw"))

    args, kwargs = smtp_client.factory.call_args
    assert args == ("mail.example.com", 465)
    assert kwargs["timeout"] == 5.0
    assert kwargs["context"] is not None
    smtp_client.login.assert_called_once_with("handover@example.com", "pw")
    smtp_client.send_message.assert_called_once()
    log_text = context.log_path.read_text()
    assert "connecting to mail.example.com:465" in log_text
    assert "message accepted for ops@example.com" in log_text
    assert "pw" not in log_text


def test_authentication_failure_is_delivery_error(
    smtp_client: MagicMock, context: NotificationContext
) -> None:
    smtp_client.login.side_effect = smtplib.SMTPAuthenticationError(535, b"bad credentials")

    with pytest.raises(DeliveryError) as excinfo:
        _provider().send(context, MailSecret("wrong"))

    error = excinfo.value
    assert str(error) == "SMTP authentication failed"
    assert error.context["server"] == "mail.example.com"
    assert error.context["account"] == "handover@example.com"
    assert error.context["log"] == str(context.log_path)
    smtp_client.send_message.assert_not_called()
    assert "authentication failed" in context.log_path.read_text()


def test_connection_failure_is_delivery_error(
    smtp_client: MagicMock, context: NotificationContext
) -> None:
    smtp_client.factory.side_effect = ConnectionRefusedError("refused")

    with pytest.raises(DeliveryError) as excinfo:
        _provider().send(context, MailSecret("pw"))

    assert "refused" in str(excinfo.value)
    assert excinfo.value.context["port"] == 465
    assert isinstance(excinfo.value.__cause__, ConnectionRefusedError)


def test_unreadable_attachment_is_delivery_error(
    smtp_client: MagicMock, context: NotificationContext, tmp_path: Path
) -> None:
    broken = NotificationContext(
        recipient=context.recipient,
        subject=context.subject,
        body=context.body,
        attachments=(tmp_path / "gone.tar.gz",),
        log_path=context.log_path,
    )

    with pytest.raises(DeliveryError):
        _provider().send(broken, MailSecret("pw"))
    smtp_client.factory.assert_not_called()


def test_empty_password_is_left_to_the_server(
    smtp_client: MagicMock, context: NotificationContext
) -> None:
    smtp_client.login.side_effect = smtplib.SMTPAuthenticationError(535, b"empty password")

    with pytest.raises(DeliveryError) as excinfo:
        _provider().send(context, MailSecret(""))

    smtp_client.login.assert_called_once_with("handover@example.com", "")
    assert excinfo.value.context["server"] == "mail.example.com"
    assert "authentication failed" in context.log_path.read_text()
