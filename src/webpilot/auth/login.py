"""Credential-driven login built on the auth locator, filler and submitter."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..core.config import EngineConfig, require_credentials
from ..core.models import FillBatchResult, FormDescriptor, Role, SubmitResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    form: Optional[FormDescriptor] = None
    fill: Optional[FillBatchResult] = None
    submit: Optional[SubmitResult] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return bool(self.fill and self.fill.success_count and self.submit and self.submit.succeeded)

    @property
    def message(self) -> str:
        if self.error:
            return f"Login failed: {self.error}"
        parts = [self.fill.message if self.fill else "", self.submit.message if self.submit else ""]
        return "; ".join(part for part in parts if part)


def credential_overrides(config: EngineConfig) -> Dict[Role, str]:
    """Configured credentials take precedence over the fixed test values."""

    identifier = config.auth_email or config.auth_username or ""
    overrides: Dict[Role, str] = {Role.PASSWORD: config.auth_password or ""}
    overrides[Role.EMAIL] = config.auth_email or identifier
    overrides[Role.USERNAME] = config.auth_username or identifier
    return overrides


async def login_with_credentials(page: Any, engine: Any, config: EngineConfig) -> LoginResult:
    """Fills the first auth form with the configured credentials and submits it.

    Raises ``ConfigurationError`` before touching the page when credentials
    are missing.
    """

    require_credentials(config)

    section = await engine.locate_auth_section(page)
    if section.error:
        return LoginResult(error=section.error)
    if not section.forms:
        return LoginResult(error="no login form found on the page")

    form = section.forms[0]
    logger.debug("Using auth form %s", form.selector)
    fill = await engine.filler.fill_all(
        page,
        form.fields,
        scope=form.selector,
        overrides=credential_overrides(config),
    )
    submit = await engine.submit(page, None if form.implicit else form.selector)
    return LoginResult(form=form, fill=fill, submit=submit)
