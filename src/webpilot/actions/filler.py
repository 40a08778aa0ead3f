"""Types values into fields the way a user would, then checks they stuck.

Per field the executor walks ``located -> focused -> cleared -> typed ->
verified``; on a mismatch it performs exactly one direct whole-value set and
accepts whatever that produces. Interaction errors never escape: they become
a failed :class:`FillResult` carrying the original message.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional

from ..core.models import FieldDescriptor, FillBatchResult, FillResult, Role
from ..core.pacing import Pacing, pause
from .values import value_for_field

logger = logging.getLogger(__name__)

CHECKABLE_TYPES = {"checkbox", "radio"}
SELECT_ALL = "ControlOrMeta+A"

OPTIONS_SCRIPT = """(el) => Array.from(el.options || []).map((option) => ({
  value: option.value,
  label: (option.label || option.text || '').trim(),
}))"""


def _error_text(exc: BaseException) -> str:
    return str(exc).strip().splitlines()[0] if str(exc).strip() else exc.__class__.__name__


def choose_option(options: Iterable[Mapping[str, str]], wanted: str) -> Optional[str]:
    """Option value to select: label match, then value match, then first non-empty."""

    options = list(options)
    for option in options:
        if option.get("label") == wanted:
            return option.get("value")
    for option in options:
        if option.get("value") == wanted:
            return option.get("value")
    for option in options:
        if option.get("value"):
            return option.get("value")
    return None


@dataclass(slots=True)
class FieldFiller:
    pacing: Pacing = field(default_factory=Pacing)
    timeout_ms: int = 5000

    async def fill(
        self,
        page: Any,
        descriptor: FieldDescriptor,
        value: str,
    ) -> FillResult:
        selector = descriptor.selector
        try:
            locator = await self._locate(page, selector)
            if descriptor.tag == "select":
                return await self._fill_select(locator, descriptor, value)
            if descriptor.input_type in CHECKABLE_TYPES:
                return await self._fill_checkable(locator, descriptor)
            return await self._fill_text(page, locator, descriptor, value)
        except Exception as exc:  # noqa: BLE001 - every interaction failure is reported per field
            logger.warning("Could not fill %s: %s", selector, _error_text(exc))
            logger.debug("Fill failure for %s", selector, exc_info=True)
            return FillResult(
                selector=selector,
                expected_value=value,
                observed_value=None,
                succeeded=False,
                error=_error_text(exc),
                role=descriptor.role,
            )

    async def fill_all(
        self,
        page: Any,
        fields: Iterable[FieldDescriptor],
        *,
        scope: Optional[str] = None,
        overrides: Optional[Mapping[Role, str]] = None,
    ) -> FillBatchResult:
        """Fills every field in order; a failure never stops the batch."""

        results: List[FillResult] = []
        for descriptor in fields:
            result = await self.fill(page, descriptor, value_for_field(descriptor, overrides))
            logger.info(result.message)
            results.append(result)
            await pause(self.pacing.step_delay_ms)
        return FillBatchResult(scope=scope, results=tuple(results))

    async def read_value(self, page: Any, descriptor: FieldDescriptor) -> str:
        locator = page.locator(descriptor.selector).first
        if descriptor.input_type in CHECKABLE_TYPES:
            return "true" if await locator.is_checked() else "false"
        return await locator.input_value(timeout=self.timeout_ms)

    # ------------------------------------------------------------------
    # States
    # ------------------------------------------------------------------
    async def _locate(self, page: Any, selector: str) -> Any:
        locator = page.locator(selector).first
        await locator.wait_for(state="visible", timeout=self.timeout_ms)
        await locator.scroll_into_view_if_needed(timeout=self.timeout_ms)
        logger.debug("Located %s", selector)
        return locator

    async def _fill_text(
        self,
        page: Any,
        locator: Any,
        descriptor: FieldDescriptor,
        value: str,
    ) -> FillResult:
        selector = descriptor.selector

        await locator.click(timeout=self.timeout_ms)
        logger.debug("Focused %s", selector)

        await page.keyboard.press(SELECT_ALL)
        await page.keyboard.press("Delete")
        logger.debug("Cleared %s", selector)
        await pause(self.pacing.step_delay_ms)

        await locator.press_sequentially(value, delay=self.pacing.typing_delay_ms)
        logger.debug("Typed %d character(s) into %s", len(value), selector)

        observed = await locator.input_value(timeout=self.timeout_ms)
        if observed == value:
            return FillResult(selector, value, observed, True, role=descriptor.role)

        logger.debug("Mismatch on %s (read %r), setting directly", selector, observed)
        try:
            await locator.fill(value, timeout=self.timeout_ms)
            observed = await locator.input_value(timeout=self.timeout_ms)
        except Exception as exc:  # noqa: BLE001 - the typed value is still reported
            logger.warning("Direct set of %s failed: %s", selector, _error_text(exc))
            return FillResult(
                selector,
                value,
                observed,
                False,
                error=_error_text(exc),
                retried=True,
                role=descriptor.role,
            )
        return FillResult(
            selector,
            value,
            observed,
            observed == value,
            retried=True,
            role=descriptor.role,
        )

    async def _fill_checkable(self, locator: Any, descriptor: FieldDescriptor) -> FillResult:
        await locator.check(timeout=self.timeout_ms)
        observed = "true" if await locator.is_checked() else "false"
        if observed == "true":
            return FillResult(descriptor.selector, "true", observed, True, role=descriptor.role)

        await locator.check(timeout=self.timeout_ms, force=True)
        observed = "true" if await locator.is_checked() else "false"
        return FillResult(
            descriptor.selector,
            "true",
            observed,
            observed == "true",
            retried=True,
            role=descriptor.role,
        )

    async def _fill_select(self, locator: Any, descriptor: FieldDescriptor, value: str) -> FillResult:
        options = await locator.evaluate(OPTIONS_SCRIPT)
        chosen = choose_option(options, value)
        if chosen is None:
            return FillResult(
                descriptor.selector,
                value,
                None,
                False,
                error="select has no selectable option",
                role=descriptor.role,
            )

        await locator.select_option(value=chosen, timeout=self.timeout_ms)
        observed = await locator.input_value(timeout=self.timeout_ms)
        return FillResult(descriptor.selector, chosen, observed, observed == chosen, role=descriptor.role)
