"""Maps weak textual signals of a form field to a semantic :class:`Role`.

Classification is an ordered rule table: every rule is a predicate over the
normalized field signals plus the role it yields, and the first matching
rule wins. The order is a deliberate tie-break (a ``type="password"`` field
named ``username_or_email`` is a password, a text field with the same name
is an email), so rules must not be reordered.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Pattern, Tuple

from ..core.models import FieldDescriptor, RawElement, Role, ScanTarget


def _keywords(pattern: str) -> Pattern[str]:
    return re.compile(pattern, re.IGNORECASE)


EMAIL_KEYWORDS = _keywords(r"e-?mail")
PASSWORD_KEYWORDS = _keywords(r"passw(?:or)?d|passcode|(?<![a-z])(?:pass|pwd)(?![a-z])")
USERNAME_KEYWORDS = _keywords(r"user[\s_-]?(?:name|id)?|login|account|handle|nickname")
PHONE_KEYWORDS = _keywords(r"phone|mobile|(?<![a-z])cell|(?<![a-z])tel(?![a-z])|telephone|whatsapp")
MESSAGE_KEYWORDS = _keywords(r"message|(?<![a-z])msg|comment|enquiry|inquiry|question|note")
FIRST_NAME_KEYWORDS = _keywords(r"first[\s_-]?name|(?<![a-z])fname|given[\s_-]?name|forename")
LAST_NAME_KEYWORDS = _keywords(r"last[\s_-]?name|(?<![a-z])lname|surname|family[\s_-]?name")
NAME_KEYWORDS = _keywords(r"name")
SUBJECT_KEYWORDS = _keywords(r"subject|topic|regarding|(?<![a-z])title(?![a-z])")
COMPANY_KEYWORDS = _keywords(r"company|organi[sz]ation|business|employer|(?<![a-z])org(?![a-z])")
ADDRESS_KEYWORDS = _keywords(r"address|street|city|(?<![a-z])zip|postal|post[\s_-]?code")

TYPE_ROLES = {
    "email": Role.EMAIL,
    "password": Role.PASSWORD,
    "tel": Role.PHONE,
    "url": Role.URL,
    "number": Role.NUMBER,
    "date": Role.DATE,
}

CONTACT_ROLES = frozenset(
    {
        Role.FULL_NAME,
        Role.FIRST_NAME,
        Role.LAST_NAME,
        Role.EMAIL,
        Role.PHONE,
        Role.MESSAGE,
        Role.SUBJECT,
    }
)
AUTH_ROLES = frozenset({Role.PASSWORD, Role.USERNAME})

CONTACT_FIELD_KEYWORDS = _keywords(r"name|email|message|subject|phone")
AUTH_FIELD_KEYWORDS = _keywords(r"log.?in|sign.?in|password|passwd|username|auth")


@dataclass(frozen=True, slots=True)
class FieldSignals:
    """Normalized inputs of the classifier."""

    input_type: str = ""
    tag: str = ""
    haystack: str = ""

    @classmethod
    def from_values(
        cls,
        *,
        name: Optional[str] = None,
        element_id: Optional[str] = None,
        placeholder: Optional[str] = None,
        input_type: Optional[str] = None,
        tag: Optional[str] = None,
        aria_label: Optional[str] = None,
        label: Optional[str] = None,
    ) -> "FieldSignals":
        parts = [
            value.strip()
            for value in (name, element_id, placeholder, aria_label, label)
            if isinstance(value, str) and value.strip()
        ]
        return cls(
            input_type=(input_type or "").strip().lower(),
            tag=(tag or "").strip().lower(),
            haystack=" ".join(parts),
        )


@dataclass(frozen=True, slots=True)
class ClassificationRule:
    predicate: Callable[[FieldSignals], bool]
    role: Role


def _type_is(input_type: str) -> Callable[[FieldSignals], bool]:
    return lambda signals: signals.input_type == input_type


def _matches(pattern: Pattern[str]) -> Callable[[FieldSignals], bool]:
    return lambda signals: bool(pattern.search(signals.haystack))


def _is_message(signals: FieldSignals) -> bool:
    return signals.tag == "textarea" or bool(MESSAGE_KEYWORDS.search(signals.haystack))


def _is_full_name(signals: FieldSignals) -> bool:
    # "company_name" belongs to the company rule further down.
    return bool(NAME_KEYWORDS.search(signals.haystack)) and not COMPANY_KEYWORDS.search(
        signals.haystack
    )


RULES: Tuple[ClassificationRule, ...] = (
    *(ClassificationRule(_type_is(input_type), role) for input_type, role in TYPE_ROLES.items()),
    ClassificationRule(_matches(EMAIL_KEYWORDS), Role.EMAIL),
    ClassificationRule(_matches(PASSWORD_KEYWORDS), Role.PASSWORD),
    ClassificationRule(_matches(USERNAME_KEYWORDS), Role.USERNAME),
    ClassificationRule(_matches(PHONE_KEYWORDS), Role.PHONE),
    ClassificationRule(_is_message, Role.MESSAGE),
    ClassificationRule(_matches(FIRST_NAME_KEYWORDS), Role.FIRST_NAME),
    ClassificationRule(_matches(LAST_NAME_KEYWORDS), Role.LAST_NAME),
    ClassificationRule(_is_full_name, Role.FULL_NAME),
    ClassificationRule(_matches(SUBJECT_KEYWORDS), Role.SUBJECT),
    ClassificationRule(_matches(COMPANY_KEYWORDS), Role.COMPANY),
    ClassificationRule(_matches(ADDRESS_KEYWORDS), Role.ADDRESS),
)


def classify_signals(signals: FieldSignals, rules: Iterable[ClassificationRule] = RULES) -> Role:
    for rule in rules:
        if rule.predicate(signals):
            return rule.role
    return Role.GENERIC


def classify_field(
    *,
    name: Optional[str] = None,
    element_id: Optional[str] = None,
    placeholder: Optional[str] = None,
    input_type: Optional[str] = None,
    tag: Optional[str] = None,
    aria_label: Optional[str] = None,
    label: Optional[str] = None,
) -> Role:
    """Returns the role of a field; ``Role.GENERIC`` when nothing matches."""

    return classify_signals(
        FieldSignals.from_values(
            name=name,
            element_id=element_id,
            placeholder=placeholder,
            input_type=input_type,
            tag=tag,
            aria_label=aria_label,
            label=label,
        )
    )


def classify_raw(element: RawElement) -> Role:
    return classify_field(
        name=element.get("name"),
        element_id=element.get("id"),
        placeholder=element.get("placeholder"),
        input_type=element.get("type"),
        tag=element.get("tag"),
        aria_label=element.get("aria_label"),
        label=element.get("label"),
    )


def _raw_text(field: FieldDescriptor) -> str:
    return " ".join(
        value for value in (field.name, field.id, field.placeholder) if isinstance(value, str)
    )


def matches_category(field: FieldDescriptor, category: ScanTarget) -> bool:
    """True when the field's role or raw attributes belong to ``category``."""

    if category is ScanTarget.ALL:
        return True
    if category is ScanTarget.CONTACT:
        return field.role in CONTACT_ROLES or bool(CONTACT_FIELD_KEYWORDS.search(_raw_text(field)))
    return field.role in AUTH_ROLES or bool(AUTH_FIELD_KEYWORDS.search(_raw_text(field)))
