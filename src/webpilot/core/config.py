"""Configuration loading and CLI parsing utilities."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigurationError
from .pacing import Pacing


@dataclass(slots=True)
class EngineConfig:
    """Holds runtime options for a browser session and the engine operations."""

    target_url: Optional[str]
    report_path: Path
    headless: bool = False
    pacing: Pacing = field(default_factory=Pacing)
    wait_timeout_ms: int = 5000
    navigation_timeout_ms: int = 60000
    auth_email: Optional[str] = None
    auth_username: Optional[str] = None
    auth_password: Optional[str] = None

    @property
    def has_credentials(self) -> bool:
        return bool(self.auth_password and (self.auth_email or self.auth_username))


def _int_from_env(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}") from exc
    if value < 0:
        raise ConfigurationError(f"{key} must not be negative, got {value}")
    return value


def load_configuration(
    target_url: Optional[str] = None,
    report_name: str = "webpilot_report.json",
    *,
    pacing_enabled: bool = True,
    headless: Optional[bool] = None,
) -> EngineConfig:
    """Builds an ``EngineConfig`` from CLI input and environment variables."""

    load_dotenv()  # Loads .env values if present

    if pacing_enabled:
        pacing = Pacing(
            typing_delay_ms=_int_from_env("TYPING_DELAY_MS", 50),
            step_delay_ms=_int_from_env("STEP_DELAY_MS", 500),
            settle_ms=_int_from_env("SETTLE_MS", 2000),
        )
    else:
        pacing = Pacing.disabled()

    if headless is None:
        headless = os.getenv("HEADLESS", "false").lower() in {"1", "true", "yes"}

    return EngineConfig(
        target_url=target_url.rstrip("/") if target_url else None,
        report_path=Path(report_name).resolve(),
        headless=headless,
        pacing=pacing,
        wait_timeout_ms=_int_from_env("WAIT_TIMEOUT_MS", 5000),
        navigation_timeout_ms=_int_from_env("NAVIGATION_TIMEOUT_MS", 60000),
        auth_email=os.getenv("EMAIL_LOGIN") or None,
        auth_username=os.getenv("USERNAME_LOGIN") or None,
        auth_password=os.getenv("PASSWORD_LOGIN") or None,
    )


def require_credentials(config: EngineConfig) -> None:
    """Fails fast when the login flow has nothing to log in with."""

    if config.has_credentials:
        return
    missing = []
    if not config.auth_email and not config.auth_username:
        missing.append("EMAIL_LOGIN or USERNAME_LOGIN")
    if not config.auth_password:
        missing.append("PASSWORD_LOGIN")
    raise ConfigurationError(f"Missing credentials: {', '.join(missing)} (set them in .env)")
