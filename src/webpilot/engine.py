"""Stateless operations over a caller-supplied Playwright page.

Every operation takes the page explicitly, builds its descriptors fresh and
returns a structured result; failures are logged and reported in the
result's ``error`` instead of being raised.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Dict, Mapping, Optional, Union

from .actions.filler import FieldFiller
from .actions.submitter import FormSubmitter
from .actions.values import value_for_field
from .core.config import EngineConfig
from .core.models import (
    FieldDescriptor,
    FillBatchResult,
    FillResult,
    Role,
    ScanTarget,
    SectionReport,
    SubmitResult,
)
from .core.report import ScanReport
from .recon.dom_scripts import DESCRIBE_FIELD_SCRIPT
from .recon.forms import FormScanner, build_field_descriptor
from .recon.sections import AUTH_LOCATOR, CONTACT_LOCATOR, SectionLocator

logger = logging.getLogger(__name__)


class FormEngine:
    def __init__(self, config: EngineConfig) -> None:
        self.config = config
        self.filler = FieldFiller(pacing=config.pacing, timeout_ms=config.wait_timeout_ms)
        self.submitter = FormSubmitter(pacing=config.pacing, timeout_ms=config.wait_timeout_ms)

    async def scan(
        self,
        page: Any,
        target: Union[ScanTarget, str] = ScanTarget.ALL,
        scope: Optional[str] = None,
    ) -> ScanReport:
        url = getattr(page, "url", "") or ""
        try:
            target = ScanTarget(target)
            title = await page.title()
            forms = await FormScanner(target=target, scope=scope).scan_page(page)
            contact = await CONTACT_LOCATOR.locate_page(page) if target is ScanTarget.CONTACT else None
            auth = await AUTH_LOCATOR.locate_page(page) if target is ScanTarget.AUTH else None
        except Exception as exc:  # noqa: BLE001 - reported in the result
            logger.warning("Scan of %s failed: %s", url or "page", exc)
            return ScanReport(url=url, error=str(exc))
        return ScanReport(url=url, title=title, forms=forms, contact=contact, auth=auth)

    async def describe_field(self, page: Any, selector: str) -> FieldDescriptor:
        raw = await page.locator(selector).first.evaluate(DESCRIBE_FIELD_SCRIPT)
        return replace(build_field_descriptor(raw), selector=selector)

    async def fill_field(
        self,
        page: Any,
        field_or_selector: Union[FieldDescriptor, str],
        value: Optional[str] = None,
    ) -> FillResult:
        """Classifies (when given a selector) and fills a single field."""

        if isinstance(field_or_selector, FieldDescriptor):
            descriptor = field_or_selector
        else:
            try:
                descriptor = await self.describe_field(page, field_or_selector)
            except Exception as exc:  # noqa: BLE001 - reported in the result
                logger.warning("Could not inspect %s: %s", field_or_selector, exc)
                return FillResult(
                    selector=field_or_selector,
                    expected_value=value or "",
                    observed_value=None,
                    succeeded=False,
                    error=str(exc),
                )

        if value is None:
            value = value_for_field(descriptor)
        result = await self.filler.fill(page, descriptor, value)
        logger.info(result.message)
        return result

    async def fill_form(
        self,
        page: Any,
        scope: Optional[str] = None,
        overrides: Optional[Mapping[Role, str]] = None,
    ) -> FillBatchResult:
        """Fills the first form of ``scope`` that has fillable fields.

        The batch scope is the selector of the form actually filled, so it can
        be handed straight to :meth:`submit`.
        """

        try:
            forms = await FormScanner(scope=scope).scan_page(page)
        except Exception as exc:  # noqa: BLE001 - reported in the result
            logger.warning("Could not scan %s: %s", scope or "document", exc)
            return FillBatchResult(scope=scope, error=str(exc))

        form = next((candidate for candidate in forms if candidate.fields), None)
        if form is None:
            return FillBatchResult(scope=scope, error="no fillable fields found")

        return await self.filler.fill_all(
            page,
            form.fields,
            scope=form.selector,
            overrides=overrides,
        )

    async def read_values(self, page: Any, scope: Optional[str] = None) -> Dict[str, Optional[str]]:
        """Current value of every scanned field, keyed by selector; read-only.

        Fields that cannot be read map to ``None``; a failed scan yields ``{}``.
        """

        try:
            forms = await FormScanner(scope=scope).scan_page(page)
        except Exception as exc:  # noqa: BLE001 - reported as an empty mapping
            logger.warning("Could not scan %s: %s", scope or "document", exc)
            return {}

        values: Dict[str, Optional[str]] = {}
        for form in forms:
            for descriptor in form.fields:
                try:
                    values[descriptor.selector] = await self.filler.read_value(page, descriptor)
                except Exception as exc:  # noqa: BLE001 - unreadable field
                    logger.debug("Could not read %s: %s", descriptor.selector, exc)
                    values[descriptor.selector] = None
        return values

    async def submit(self, page: Any, scope: Optional[str] = None) -> SubmitResult:
        result = await self.submitter.submit(page, scope)
        logger.info(result.message)
        return result

    async def locate_contact_section(self, page: Any) -> SectionReport:
        return await self._locate(page, CONTACT_LOCATOR)

    async def locate_auth_section(self, page: Any) -> SectionReport:
        return await self._locate(page, AUTH_LOCATOR)

    async def _locate(self, page: Any, locator: SectionLocator) -> SectionReport:
        try:
            return await locator.locate_page(page)
        except Exception as exc:  # noqa: BLE001 - reported in the result
            logger.warning("%s section lookup failed: %s", locator.category.value, exc)
            return SectionReport(category=locator.category, error=str(exc))
