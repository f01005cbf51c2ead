from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Callable, Optional

import typer

from hi_runner.services.doctor import DoctorService
from hi_ui.presenter import RichPresenter


@dataclass
class CLIContext:
    """Container for CLI services, initialized lazily."""

    _presenter: Optional[RichPresenter] = None
    _doctor_service: Optional[DoctorService] = None

    @property
    def presenter(self) -> RichPresenter:
        if self._presenter is None:
            self._presenter = RichPresenter()
        return self._presenter

    @presenter.setter
    def presenter(self, value: RichPresenter) -> None:
        self._presenter = value

    @property
    def doctor_service(self) -> DoctorService:
        if self._doctor_service is None:
            self._doctor_service = DoctorService()
        return self._doctor_service

    @doctor_service.setter
    def doctor_service(self, value: DoctorService) -> None:
        self._doctor_service = value


def password_source(user: str, from_stdin: bool) -> Callable[[], str]:
    """Return a callable that obtains the SMTP password only when needed."""

    def read() -> str:
        if from_stdin:
            return sys.stdin.readline().rstrip("\r\n")
        return typer.prompt(f"SMTP password for {user}", hide_input=True)

    return read
