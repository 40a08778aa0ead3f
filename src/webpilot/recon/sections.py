"""Contact and authentication section locators.

Both are thin specializations of the form scan: they add keyword-matched
container regions and links to the forms flagged for their category. The
result only describes what exists on the page; nothing is clicked.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Tuple

from bs4 import BeautifulSoup

from ..core.models import ScanTarget, SectionLink, SectionRegion, SectionReport
from .dom_scripts import SECTION_SCRIPT
from .forms import DOCUMENT_SCOPE, FormScanner
from .snapshot import REGION_TAGS, sections_from_soup
from .utils import synthesize_selector

logger = logging.getLogger(__name__)

CONTACT_SECTION_KEYWORDS = r"contact|get.?in.?touch|reach.?out|email.?us|call.?us|message"
AUTH_SECTION_KEYWORDS = r"log.?in|sign.?in|sign.?up|register|account|auth|password"

MAX_LINKS = 50
MAX_REGIONS = 25


def _selector_for(raw: Dict[str, Any]) -> str:
    return synthesize_selector(
        tag=raw.get("tag"),
        element_id=raw.get("id"),
        class_name=raw.get("class_name"),
        container=DOCUMENT_SCOPE,
        path=raw.get("path"),
        id_matches=raw.get("id_matches"),
        class_matches=raw.get("class_matches"),
    )


@dataclass(frozen=True, slots=True)
class SectionLocator:
    category: ScanTarget
    pattern: str

    @property
    def keywords(self) -> "re.Pattern[str]":
        return re.compile(self.pattern, re.IGNORECASE)

    async def locate_page(self, page: Any) -> SectionReport:
        raw = await page.evaluate(
            SECTION_SCRIPT,
            {"pattern": self.pattern, "flags": "i", "containers": ", ".join(REGION_TAGS)},
        )
        forms = await FormScanner(target=self.category).scan_page(page)
        return self.build_report(raw.get("links") or [], raw.get("regions") or [], forms)

    def locate_soup(self, soup: BeautifulSoup, base_url: str = "") -> SectionReport:
        raw = sections_from_soup(soup, self.keywords, base_url)
        forms = FormScanner(target=self.category).scan_soup(soup, base_url)
        return self.build_report(raw["links"], raw["regions"], forms)

    def build_report(
        self,
        raw_links: Iterable[Dict[str, Any]],
        raw_regions: Iterable[Dict[str, Any]],
        forms: Tuple[Any, ...],
    ) -> SectionReport:
        links: List[SectionLink] = []
        seen: set[tuple[str, str]] = set()
        for raw in raw_links:
            key = (raw.get("href") or "", raw.get("text") or "")
            if key in seen:
                continue
            seen.add(key)
            links.append(
                SectionLink(
                    text=raw.get("text") or "",
                    href=raw.get("href") or "",
                    title=raw.get("title"),
                    selector=_selector_for(raw),
                )
            )

        regions = [
            SectionRegion(
                tag=raw.get("tag") or "div",
                selector=_selector_for(raw),
                id=raw.get("id"),
                class_name=raw.get("class_name"),
                has_form=bool(raw.get("has_form")),
                text=raw.get("text") or "",
            )
            for raw in raw_regions
        ]

        report = SectionReport(
            category=self.category,
            links=tuple(links[:MAX_LINKS]),
            regions=tuple(regions[:MAX_REGIONS]),
            forms=tuple(forms),
        )
        logger.debug(
            "%s section: %d link(s), %d region(s), %d form(s)",
            self.category.value,
            len(report.links),
            len(report.regions),
            len(report.forms),
        )
        return report


CONTACT_LOCATOR = SectionLocator(ScanTarget.CONTACT, CONTACT_SECTION_KEYWORDS)
AUTH_LOCATOR = SectionLocator(ScanTarget.AUTH, AUTH_SECTION_KEYWORDS)
