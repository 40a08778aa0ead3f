"""Finds and triggers the control that submits a form."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..core.models import CandidateKind, SubmitAttempt, SubmitCandidate, SubmitResult
from ..core.pacing import Pacing, pause
from ..recon.dom_scripts import HIGHLIGHT_SCRIPT, NATIVE_SUBMIT_SCRIPT, SUBMIT_CANDIDATES_SCRIPT
from ..recon.utils import structural_selector, synthesize_selector

logger = logging.getLogger(__name__)

SUBMIT_ATTRIBUTE_PATTERN = r"submit|send"
_SUBMIT_ATTRIBUTES = re.compile(SUBMIT_ATTRIBUTE_PATTERN, re.IGNORECASE)

EXPLICIT_INPUT_TYPES = {"submit", "image"}
NEVER_SUBMITS = {"reset", "hidden"}


def candidate_kind(raw: Dict[str, Any]) -> Optional[CandidateKind]:
    """Explicit submit semantics first; otherwise submit-ish id/class/onclick."""

    tag = (raw.get("tag") or "").lower()
    input_type = (raw.get("type") or "").lower() or None
    if input_type in NEVER_SUBMITS:
        return None
    if tag == "button" and input_type in (None, "submit"):
        return CandidateKind.EXPLICIT_SUBMIT
    if tag == "input" and input_type in EXPLICIT_INPUT_TYPES:
        return CandidateKind.EXPLICIT_SUBMIT

    haystack = " ".join(
        value for value in (raw.get("id"), raw.get("class_name"), raw.get("onclick")) if value
    )
    if _SUBMIT_ATTRIBUTES.search(haystack):
        return CandidateKind.ATTRIBUTE_HEURISTIC
    return None


def build_candidates(
    raw_candidates: Iterable[Dict[str, Any]],
    container: str,
) -> Tuple[SubmitCandidate, ...]:
    """Candidates ordered by kind, document order within a kind."""

    explicit: List[SubmitCandidate] = []
    heuristic: List[SubmitCandidate] = []
    seen: set[str] = set()
    for raw in raw_candidates:
        kind = candidate_kind(raw)
        if kind is None:
            continue
        selector = synthesize_selector(
            tag=raw.get("tag"),
            element_id=raw.get("id"),
            class_name=raw.get("class_name"),
            container=container,
            path=raw.get("path"),
            id_matches=raw.get("id_matches"),
            class_matches=raw.get("class_matches"),
        )
        if selector in seen:
            continue
        seen.add(selector)
        candidate = SubmitCandidate(
            selector=selector,
            kind=kind,
            text=raw.get("text") or "",
            form_index=raw.get("form_index"),
            disabled=bool(raw.get("disabled")),
        )
        (explicit if kind is CandidateKind.EXPLICIT_SUBMIT else heuristic).append(candidate)
    return tuple(explicit + heuristic)


@dataclass(slots=True)
class FormSubmitter:
    pacing: Pacing = field(default_factory=Pacing)
    timeout_ms: int = 5000

    async def discover(self, page: Any, scope: Optional[str] = None) -> Tuple[SubmitCandidate, ...]:
        raw = await page.evaluate(
            SUBMIT_CANDIDATES_SCRIPT,
            {"scopeSelector": scope, "pattern": SUBMIT_ATTRIBUTE_PATTERN},
        )
        if not raw.get("scope_found", False):
            logger.debug("Submit scope %s matched nothing", scope)
            return ()
        container = scope or structural_selector(container=":root", path=raw.get("scope_path") or None)
        return build_candidates(raw.get("candidates") or [], container)

    async def submit(self, page: Any, scope: Optional[str] = None) -> SubmitResult:
        attempts: List[SubmitAttempt] = []
        try:
            candidates = await self.discover(page, scope)
        except Exception as exc:  # noqa: BLE001 - discovery failure still allows the native fallback
            logger.warning("Submit candidate discovery failed: %s", exc)
            candidates = ()

        for candidate in candidates:
            if candidate.disabled:
                logger.debug("Skipping disabled candidate %s", candidate.selector)
                continue
            try:
                await self._click(page, candidate)
            except Exception as exc:  # noqa: BLE001 - next candidate is tried
                logger.debug("Candidate %s failed: %s", candidate.selector, exc)
                attempts.append(SubmitAttempt(candidate.selector, str(exc)))
                continue
            attempts.append(SubmitAttempt(candidate.selector))
            return SubmitResult(
                succeeded=True,
                method="click",
                candidate=candidate,
                attempts=tuple(attempts),
                scope=scope,
            )

        logger.debug("No clickable candidate worked, submitting %s natively", scope or "first form")
        try:
            await page.evaluate(NATIVE_SUBMIT_SCRIPT, scope)
        except Exception as exc:  # noqa: BLE001 - reported in the result
            attempts.append(SubmitAttempt("form.submit()", str(exc)))
            return SubmitResult(
                succeeded=False,
                attempts=tuple(attempts),
                error=str(exc),
                scope=scope,
            )
        await pause(self.pacing.settle_ms)
        attempts.append(SubmitAttempt("form.submit()"))
        return SubmitResult(
            succeeded=True,
            method="programmatic",
            attempts=tuple(attempts),
            scope=scope,
        )

    async def _click(self, page: Any, candidate: SubmitCandidate) -> None:
        locator = page.locator(candidate.selector).first
        await locator.scroll_into_view_if_needed(timeout=self.timeout_ms)
        try:
            await locator.evaluate(HIGHLIGHT_SCRIPT)
        except Exception:  # noqa: BLE001 - outline is cosmetic
            logger.debug("Could not highlight %s", candidate.selector)
        await locator.click(timeout=self.timeout_ms)
        logger.debug("Clicked %s (%s)", candidate.selector, candidate.kind.value)
        await pause(self.pacing.settle_ms)
