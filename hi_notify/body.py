"""Text of the handover mail."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

NOT_AVAILABLE = "n/a"


@dataclass(frozen=True)
class MailBodyContext:
    timestamp: str
    host: str
    fqdn: Optional[str]
    addresses: Sequence[str]
    system_serial: Optional[str]
    board_serial: Optional[str]
    attachment_mode: str
    full_size: int
    light_size: int
    limit: int
    summary_text: str = ""
    excerpt_lines: int = 160


def build_subject(host: str, timestamp: str) -> str:
    return f"[Handover] {host} | {timestamp}"


def _value(value: Optional[str]) -> str:
    return value.strip() if value and value.strip() else NOT_AVAILABLE


def summary_excerpt(summary_text: str, max_lines: int) -> str:
    return "\n".join(summary_text.splitlines()[:max_lines])


def render_mail_body(ctx: MailBodyContext) -> str:
    limit_mib = ctx.limit / (1024 * 1024)
    lines = [
        "Server Handover Inventory",
        "=========================",
        "",
        f"Timestamp (UTC): {ctx.timestamp}",
        f"Hostname:        {_value(ctx.host)}",
        f"FQDN:            {_value(ctx.fqdn)}",
        f"IP(s):           {_value(' '.join(ctx.addresses))}",
        f"System Serial:   {_value(ctx.system_serial)}",
        f"Board Serial:    {_value(ctx.board_serial)}",
        "",
        f"Attachment mode: {ctx.attachment_mode}",
        f"Full archive size:  {ctx.full_size} bytes",
        f"Light archive size: {ctx.light_size} bytes",
        f"Limit:              {ctx.limit} bytes",
        "",
        "Summary excerpt:",
        "----------------",
        summary_excerpt(ctx.summary_text, ctx.excerpt_lines),
        "",
        "Note:",
        f"- The full archive is attached only if it is at most {limit_mib:g} MiB.",
        "- If it is too large, the light archive (most important files) is attached.",
        "- If that is too large as well, only the summary is sent.",
    ]
    return "\n".join(lines) + "\n"
