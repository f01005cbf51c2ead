"""Notification delivery for handover runs."""

from hi_notify.base import NotificationContext, NotificationProvider
from hi_notify.body import MailBodyContext, build_subject, render_mail_body
from hi_notify.credentials import MailSecret, scoped_secret
from hi_notify.mailer import HandoverMailer, build_provider
from hi_notify.providers.smtp import SmtpProvider

__all__ = [
    "HandoverMailer",
    "MailBodyContext",
    "MailSecret",
    "NotificationContext",
    "NotificationProvider",
    "SmtpProvider",
    "build_provider",
    "build_subject",
    "render_mail_body",
    "scoped_secret",
]
