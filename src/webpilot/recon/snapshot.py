"""Builds raw scan records from parsed HTML instead of a live page.

Layout is unknown without a browser, so visibility is approximated from the
``hidden`` attribute, ``type="hidden"`` and inline ``display:none`` /
``visibility:hidden`` declared on the element or any ancestor.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional, Pattern

from bs4 import BeautifulSoup, Tag

from ..core.models import RawElement, RawForm, RawSnapshot
from .utils import absolute_url, first_class_token

FIELD_TAGS = ["input", "textarea", "select"]
REGION_TAGS = ["section", "div", "aside", "footer", "header", "nav", "main", "article", "form"]

_HIDDEN_STYLE = re.compile(r"display\s*:\s*none|visibility\s*:\s*hidden", re.IGNORECASE)


def _class_attr(element: Tag) -> Optional[str]:
    value = element.get("class")
    if not value:
        return None
    if isinstance(value, (list, tuple)):
        return " ".join(value)
    return str(value)


def _text(element: Tag) -> str:
    return " ".join(element.get_text(" ").split())


def is_rendered(element: Tag) -> bool:
    if element.name == "input" and (element.get("type") or "").lower() == "hidden":
        return False
    node: Any = element
    while isinstance(node, Tag) and node.name not in ("[document]", "html"):
        if node.has_attr("hidden") or _HIDDEN_STYLE.search(node.get("style") or ""):
            return False
        node = node.parent
    return True


def structural_path(element: Tag, container: Optional[Tag] = None) -> str:
    steps: List[str] = []
    node: Any = element
    while isinstance(node, Tag) and node is not container and node.name not in ("[document]", "html"):
        index = len(node.find_previous_siblings(node.name)) + 1
        steps.insert(0, f"{node.name}:nth-of-type({index})")
        node = node.parent
    return " > ".join(steps)


def _label_text(soup: BeautifulSoup, element: Tag) -> Optional[str]:
    element_id = element.get("id")
    label: Optional[Tag] = None
    if element_id:
        label = soup.find("label", attrs={"for": element_id})
    if label is None:
        label = element.find_parent("label")
    if label is None:
        return None
    return _text(label) or None


def _match_counts(soup: BeautifulSoup, element: Tag) -> Dict[str, int]:
    element_id = element.get("id")
    token = first_class_token(_class_attr(element))
    return {
        "id_matches": len(soup.find_all(id=element_id)) if element_id else 0,
        "class_matches": len(soup.find_all(class_=token)) if token else 0,
    }


def describe_field(soup: BeautifulSoup, element: Tag, container: Optional[Tag]) -> RawElement:
    tag = element.name.lower()
    input_type = (element.get("type") or "text").lower() if tag == "input" else tag
    record: RawElement = {
        "tag": tag,
        "type": input_type,
        "name": element.get("name"),
        "id": element.get("id") or None,
        "placeholder": element.get("placeholder"),
        "aria_label": element.get("aria-label"),
        "label": _label_text(soup, element),
        "class_name": _class_attr(element),
        "required": element.has_attr("required"),
        "visible": is_rendered(element),
        "path": structural_path(element, container),
        **_match_counts(soup, element),
    }
    return record


def snapshot_from_soup(
    soup: BeautifulSoup,
    base_url: str = "",
    scope: Optional[str] = None,
) -> RawSnapshot:
    """Static counterpart of the live scan query."""

    all_forms = soup.find_all("form")
    root: Optional[Tag] = soup.select_one(scope) if scope else None
    if scope and root is None:
        return {"url": base_url, "forms": [], "loose_fields": []}

    if root is not None and root.name == "form":
        forms = [root]
    elif root is not None:
        forms = root.find_all("form")
    else:
        forms = all_forms

    form_records: List[RawForm] = []
    for form in forms:
        method = (form.get("method") or "get").lower()
        action = form.get("action")
        record: RawForm = {
            "index": next(i for i, candidate in enumerate(all_forms) if candidate is form),
            "id": form.get("id") or None,
            "class_name": _class_attr(form),
            "action": absolute_url(base_url, action) if action is not None else None,
            "method": method,
            "path": structural_path(form),
            "fields": [describe_field(soup, item, form) for item in form.find_all(FIELD_TAGS)],
            **_match_counts(soup, form),
        }
        form_records.append(record)

    loose: List[RawElement] = []
    if not forms:
        container = root if root is not None else soup
        loose = [
            describe_field(soup, item, root) for item in container.find_all(FIELD_TAGS)
        ]

    return {"url": base_url, "forms": form_records, "loose_fields": loose}


def sections_from_soup(
    soup: BeautifulSoup,
    keywords: Pattern[str],
    base_url: str = "",
) -> Dict[str, List[Dict[str, Any]]]:
    """Static counterpart of the section query: keyword links and regions."""

    links: List[Dict[str, Any]] = []
    for anchor in soup.find_all("a"):
        text = _text(anchor)
        title = anchor.get("title")
        href = anchor.get("href") or ""
        if not (keywords.search(text) or keywords.search(title or "") or keywords.search(href)):
            continue
        link = {
            "tag": "a",
            "text": text,
            "href": absolute_url(base_url, href),
            "title": title or None,
            "id": anchor.get("id") or None,
            "class_name": _class_attr(anchor),
            "path": structural_path(anchor),
        }
        link.update(_match_counts(soup, anchor))
        links.append(link)

    regions: List[Dict[str, Any]] = []
    for element in soup.find_all(REGION_TAGS):
        class_name = _class_attr(element)
        matched = (
            keywords.search(element.get("id") or "")
            or keywords.search(class_name or "")
            or (element.name == "section" and keywords.search(_text(element)))
        )
        if not matched:
            continue
        region = {
            "tag": element.name,
            "has_form": element.name == "form" or element.find("form") is not None,
            "text": _text(element)[:200],
            "id": element.get("id") or None,
            "class_name": class_name,
            "path": structural_path(element),
        }
        region.update(_match_counts(soup, element))
        regions.append(region)

    return {"links": links, "regions": regions}
