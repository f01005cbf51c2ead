"""Inventory configuration (canonical definition used by the CLI and pipeline)."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from hi_common.config import parse_bool_env, parse_float_env, parse_int_env
from hi_common.errors import ConfigurationError

SUMMARY_FILE_NAME = "ZZ_HANDOVER_SUMMARY.txt"

DEFAULT_LIGHT_ARCHIVE_FILES = [
    SUMMARY_FILE_NAME,
    "10_cpu.txt",
    "20_ram.txt",
    "30_gpu_overview.txt",
    "31_gpu_details.csv",
    "50_storage_lsblk.txt",
    "52_storage_df.txt",
    "53_nvme_list.txt",
    "55_smart.txt",
    "60_network.txt",
    "70_serials.txt",
]


class MailConfig(BaseModel):
    """Configuration for the SMTPS notification."""

    enabled: bool = Field(default=True, description="Send the handover mail after collection")
    recipient: str = Field(default="handover@example.com", description="Fixed recipient address")
    sender: Optional[str] = Field(default=None, description="From address (defaults to the account user)")
    user: str = Field(default="handover@example.com", description="SMTP account used to authenticate")
    server: str = Field(default="mail.example.com", description="SMTP server hostname")
    port: int = Field(default=465, gt=0, le=65535, description="Implicit-TLS submission port")
    ca_file: Optional[Path] = Field(default=None, description="CA bundle used to verify the server")
    timeout_seconds: float = Field(default=30.0, gt=0, description="Socket timeout for the SMTP session")

    @property
    def from_address(self) -> str:
        return self.sender or self.user

    @model_validator(mode="after")
    def _validate_addresses(self) -> "MailConfig":
        for label, value in (("recipient", self.recipient), ("user", self.user)):
            if not value or "@" not in value:
                raise ValueError(f"MailConfig: '{label}' must be an email address")
        if not self.server.strip():
            raise ValueError("MailConfig: 'server' must be non-empty")
        return self


class InventoryConfig(BaseModel):
    """Main configuration for an inventory run."""

    output_root: Path = Field(default=Path("."), description="Directory receiving run directories and archives")
    dir_prefix: str = Field(default="handover", description="Prefix of the per-run directory name")
    probe_timeout_seconds: Optional[float] = Field(
        default=None, gt=0, description="Per-probe timeout; None waits indefinitely"
    )
    max_attach_bytes: int = Field(default=10 * 1024 * 1024, gt=0, description="Attachment size ceiling")
    build_light_archive: bool = Field(default=True, description="Build the curated light archive")
    light_archive_files: List[str] = Field(
        default_factory=lambda: list(DEFAULT_LIGHT_ARCHIVE_FILES),
        description="Report files packed into the light archive",
    )
    summary_excerpt_lines: int = Field(default=160, gt=0, description="Summary lines embedded in the mail body")
    require_root: bool = Field(default=True, description="Abort unless running with root privileges")
    mail: MailConfig = Field(default_factory=MailConfig, description="Notification settings")

    @model_validator(mode="after")
    def _validate_prefix(self) -> "InventoryConfig":
        if not self.dir_prefix or "/" in self.dir_prefix:
            raise ValueError("InventoryConfig: 'dir_prefix' must be a plain, non-empty name")
        return self

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InventoryConfig":
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigurationError(
                "Invalid inventory configuration", context={"errors": exc.errors()}, cause=exc
            ) from exc

    @classmethod
    def load(cls, filepath: Path) -> "InventoryConfig":
        """Load a YAML or JSON configuration file."""
        try:
            raw = filepath.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigurationError(
                f"Cannot read config file: {exc}", context={"path": filepath}, cause=exc
            ) from exc
        try:
            if filepath.suffix.lower() == ".json":
                data = json.loads(raw)
            else:
                data = yaml.safe_load(raw)
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            raise ConfigurationError(
                f"Cannot parse config file: {exc}", context={"path": filepath}, cause=exc
            ) from exc
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                "Config file must contain a mapping", context={"path": filepath}
            )
        return cls.from_dict(data)

    def save(self, filepath: Path) -> None:
        filepath.write_text(self.model_dump_json(indent=2))

    def with_env_overrides(self, environ: Mapping[str, str] | None = None) -> "InventoryConfig":
        """Return a copy with HI_* environment variables applied."""
        env = os.environ if environ is None else environ
        data = self.model_dump()
        mail = data["mail"]

        if env.get("HI_OUTPUT_ROOT"):
            data["output_root"] = Path(env["HI_OUTPUT_ROOT"])
        max_bytes = parse_int_env(env.get("HI_MAX_ATTACH_BYTES"))
        if max_bytes is not None:
            data["max_attach_bytes"] = max_bytes
        timeout = parse_float_env(env.get("HI_PROBE_TIMEOUT"))
        if timeout is not None:
            data["probe_timeout_seconds"] = timeout
        mail_enabled = parse_bool_env(env.get("HI_MAIL_ENABLED"))
        if mail_enabled is not None:
            mail["enabled"] = mail_enabled
        if env.get("HI_SMTP_SERVER"):
            mail["server"] = env["HI_SMTP_SERVER"]
        port = parse_int_env(env.get("HI_SMTP_PORT"))
        if port is not None:
            mail["port"] = port
        if env.get("HI_SMTP_USER"):
            mail["user"] = env["HI_SMTP_USER"]
        if env.get("HI_MAIL_TO"):
            mail["recipient"] = env["HI_MAIL_TO"]

        return self.from_dict(data)


def load_config(path: Path | None, environ: Mapping[str, str] | None = None) -> InventoryConfig:
    """Resolve the effective configuration from an optional file plus environment."""
    base = InventoryConfig.load(path) if path is not None else InventoryConfig()
    return base.with_env_overrides(environ)
