from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from bs4 import BeautifulSoup

from ..core.models import (
    FieldDescriptor,
    FormDescriptor,
    RawElement,
    RawForm,
    RawSnapshot,
    ScanTarget,
)
from .classifier import classify_raw, matches_category
from .dom_scripts import SCAN_SCRIPT
from .snapshot import snapshot_from_soup
from .utils import synthesize_selector

logger = logging.getLogger(__name__)

FIELD_TAGS = {"input", "textarea", "select"}
IGNORED_INPUT_TYPES = {"hidden", "submit", "button", "reset", "image", "file"}
DOCUMENT_SCOPE = ":root"


def is_candidate_field(element: RawElement) -> bool:
    """Fillable, laid-out input/textarea/select; buttons never count."""

    tag = (element.get("tag") or "").lower()
    if tag not in FIELD_TAGS:
        return False
    input_type = (element.get("type") or "").lower()
    if tag == "input" and input_type in IGNORED_INPUT_TYPES:
        return False
    return bool(element.get("visible"))


@dataclass(slots=True)
class FormScanner:
    """Turns a document into ordered, immutable form and field descriptors."""

    target: ScanTarget = ScanTarget.ALL
    scope: Optional[str] = None

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------
    async def scan_page(self, page: Any) -> Tuple[FormDescriptor, ...]:
        snapshot: RawSnapshot = await page.evaluate(SCAN_SCRIPT, self.scope)
        if not snapshot.get("scope_found", True):
            logger.debug("Scope %s matched nothing", self.scope)
        return self.build_forms(snapshot)

    def scan_soup(self, soup: BeautifulSoup, base_url: str = "") -> Tuple[FormDescriptor, ...]:
        return self.build_forms(snapshot_from_soup(soup, base_url, self.scope))

    def scan_html(self, html: str, base_url: str = "") -> Tuple[FormDescriptor, ...]:
        return self.scan_soup(BeautifulSoup(html, "html.parser"), base_url)

    # ------------------------------------------------------------------
    # Descriptor construction
    # ------------------------------------------------------------------
    def build_forms(self, snapshot: RawSnapshot) -> Tuple[FormDescriptor, ...]:
        forms: List[FormDescriptor] = [
            self.build_form(raw_form) for raw_form in snapshot.get("forms") or []
        ]

        if not forms:
            implicit = self.build_implicit_form(snapshot.get("loose_fields") or [])
            if implicit is not None:
                forms.append(implicit)

        selected = tuple(form for form in forms if self._wanted(form))
        logger.debug(
            "Scan found %d form(s), %d kept for target %s",
            len(forms),
            len(selected),
            self.target.value,
        )
        return selected

    def build_form(self, raw_form: RawForm) -> FormDescriptor:
        index = int(raw_form.get("index", 0))
        selector = synthesize_selector(
            tag="form",
            element_id=raw_form.get("id"),
            class_name=raw_form.get("class_name"),
            container=DOCUMENT_SCOPE,
            path=raw_form.get("path"),
            id_matches=raw_form.get("id_matches"),
            class_matches=raw_form.get("class_matches"),
        )
        fields = self.build_fields(raw_form.get("fields") or [], container=selector, form_index=index)
        return FormDescriptor(
            index=index,
            selector=selector,
            fields=fields,
            form_id=raw_form.get("id") or None,
            form_class=raw_form.get("class_name") or None,
            action=raw_form.get("action"),
            method=raw_form.get("method"),
            is_contact_form=any(matches_category(item, ScanTarget.CONTACT) for item in fields),
            is_auth_form=any(matches_category(item, ScanTarget.AUTH) for item in fields),
        )

    def build_implicit_form(self, raw_fields: List[RawElement]) -> Optional[FormDescriptor]:
        container = self.scope or DOCUMENT_SCOPE
        fields = self.build_fields(raw_fields, container=container, form_index=None)
        if not fields:
            return None
        return FormDescriptor(
            index=0,
            selector=container,
            fields=fields,
            is_contact_form=any(matches_category(item, ScanTarget.CONTACT) for item in fields),
            is_auth_form=any(matches_category(item, ScanTarget.AUTH) for item in fields),
            implicit=True,
        )

    def build_fields(
        self,
        raw_fields: List[RawElement],
        *,
        container: str,
        form_index: Optional[int],
    ) -> Tuple[FieldDescriptor, ...]:
        fields: List[FieldDescriptor] = []
        radio_groups = set()
        for element in raw_fields:
            if not is_candidate_field(element):
                continue
            if (element.get("type") or "").lower() == "radio" and element.get("name"):
                # one choice per group
                if element["name"] in radio_groups:
                    continue
                radio_groups.add(element["name"])
            fields.append(build_field_descriptor(element, container=container, form_index=form_index))
        return tuple(fields)

    def _wanted(self, form: FormDescriptor) -> bool:
        if self.target is ScanTarget.CONTACT:
            return form.is_contact_form
        if self.target is ScanTarget.AUTH:
            return form.is_auth_form
        return True


def build_field_descriptor(
    element: RawElement,
    *,
    container: str = DOCUMENT_SCOPE,
    form_index: Optional[int] = None,
) -> FieldDescriptor:
    tag = (element.get("tag") or "input").lower()
    return FieldDescriptor(
        tag=tag,
        input_type=(element.get("type") or tag).lower(),
        role=classify_raw(element),
        selector=synthesize_selector(
            tag=tag,
            element_id=element.get("id"),
            class_name=element.get("class_name"),
            container=container,
            path=element.get("path"),
            id_matches=element.get("id_matches"),
            class_matches=element.get("class_matches"),
        ),
        name=element.get("name"),
        id=element.get("id") or None,
        placeholder=element.get("placeholder"),
        aria_label=element.get("aria_label"),
        label=element.get("label"),
        required=bool(element.get("required")),
        visible=bool(element.get("visible", True)),
        form_index=form_index,
    )
