"""Helper utilities used by recon modules."""

from __future__ import annotations

from typing import Optional
from urllib.parse import urljoin


def css_escape(value: str) -> str:
    """Escapes an identifier for use after ``#`` or ``.`` in a CSS selector."""

    escaped: list[str] = []
    for index, char in enumerate(value):
        code = ord(char)
        if code == 0:
            escaped.append("\ufffd")
        elif 0x01 <= code <= 0x1F or code == 0x7F:
            escaped.append(f"\\{code:x} ")
        elif char.isdigit() and char.isascii() and (
            index == 0 or (index == 1 and value[0] == "-")
        ):
            escaped.append(f"\\{code:x} ")
        elif char == "-" and len(value) == 1:
            escaped.append("\\-")
        elif code >= 0x80 or char in "-_" or char.isalnum():
            escaped.append(char)
        else:
            escaped.append(f"\\{char}")
    return "".join(escaped)


def first_class_token(class_name: Optional[str]) -> Optional[str]:
    if not class_name or not isinstance(class_name, str):
        return None
    tokens = class_name.split()
    return tokens[0] if tokens else None


def synthesize_selector(
    *,
    tag: Optional[str] = None,
    element_id: Optional[str] = None,
    class_name: Optional[str] = None,
    container: Optional[str] = None,
    path: Optional[str] = None,
    id_matches: Optional[int] = None,
    class_matches: Optional[int] = None,
) -> str:
    """Best-effort selector: ``#id``, then ``.firstClassToken``, then structure.

    Only the first class token is used, so elements sharing it collide.
    When the caller knows how many elements the id or class selector
    matches in the document, a count above one escalates to the structural
    fallback instead. Without counts the plain ordering applies.
    """

    element_id = (element_id or "").strip()
    if element_id and not (id_matches is not None and id_matches > 1):
        return f"#{css_escape(element_id)}"

    token = first_class_token(class_name)
    if token and not (class_matches is not None and class_matches > 1):
        return f".{css_escape(token)}"

    return structural_selector(tag=tag, container=container, path=path)


def structural_selector(
    *,
    tag: Optional[str] = None,
    container: Optional[str] = None,
    path: Optional[str] = None,
) -> str:
    """``container > a:nth-of-type(i) > ...`` down to the element."""

    step = path or (tag or "*").lower()
    if container:
        return f"{container} > {step}" if path else f"{container} {step}"
    return step


def absolute_url(base_url: Optional[str], href: Optional[str]) -> str:
    if not href:
        return ""
    if not base_url:
        return href
    return urljoin(base_url, href)
