"""Shared data structures used across the engine."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, TypedDict


class Role(Enum):
    """Semantic purpose of a form field."""

    EMAIL = "email"
    PASSWORD = "password"
    USERNAME = "username"
    FULL_NAME = "full_name"
    FIRST_NAME = "first_name"
    LAST_NAME = "last_name"
    PHONE = "phone"
    MESSAGE = "message"
    SUBJECT = "subject"
    COMPANY = "company"
    ADDRESS = "address"
    URL = "url"
    DATE = "date"
    NUMBER = "number"
    GENERIC = "generic"


class ScanTarget(Enum):
    ALL = "all"
    CONTACT = "contact"
    AUTH = "auth"


class CandidateKind(Enum):
    EXPLICIT_SUBMIT = "explicit-submit"
    ATTRIBUTE_HEURISTIC = "attribute-heuristic"


# ----------------------------------------------------------------------
# Raw records returned by a document query (live page or parsed HTML)
# ----------------------------------------------------------------------
class RawElement(TypedDict, total=False):
    """Identifying attributes and layout facts for one element."""

    tag: str
    type: Optional[str]
    name: Optional[str]
    id: Optional[str]
    placeholder: Optional[str]
    aria_label: Optional[str]
    label: Optional[str]
    class_name: Optional[str]
    required: bool
    visible: bool
    path: str
    id_matches: int
    class_matches: int


class RawForm(TypedDict, total=False):
    """A ``<form>`` element and its candidate controls, in document order."""

    index: int
    id: Optional[str]
    class_name: Optional[str]
    action: Optional[str]
    method: Optional[str]
    path: str
    id_matches: int
    class_matches: int
    fields: List[RawElement]


class RawSnapshot(TypedDict, total=False):
    """Everything a single scan query reports about a document."""

    url: str
    forms: List[RawForm]
    loose_fields: List[RawElement]


# ----------------------------------------------------------------------
# Immutable descriptors
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class FieldDescriptor:
    """Snapshot of one form control at scan time."""

    tag: str
    input_type: str
    role: Role
    selector: str
    name: Optional[str] = None
    id: Optional[str] = None
    placeholder: Optional[str] = None
    aria_label: Optional[str] = None
    label: Optional[str] = None
    required: bool = False
    visible: bool = True
    form_index: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["role"] = self.role.value
        return data

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "FieldDescriptor":
        data = dict(raw)
        data["role"] = Role(data.get("role", Role.GENERIC.value))
        return cls(**data)


@dataclass(frozen=True)
class FormDescriptor:
    """Snapshot of one ``<form>`` (or the implicit document scope)."""

    index: int
    selector: str
    fields: Tuple[FieldDescriptor, ...] = ()
    form_id: Optional[str] = None
    form_class: Optional[str] = None
    action: Optional[str] = None
    method: Optional[str] = None
    is_contact_form: bool = False
    is_auth_form: bool = False
    implicit: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "selector": self.selector,
            "form_id": self.form_id,
            "form_class": self.form_class,
            "action": self.action,
            "method": self.method,
            "is_contact_form": self.is_contact_form,
            "is_auth_form": self.is_auth_form,
            "implicit": self.implicit,
            "fields": [item.to_dict() for item in self.fields],
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "FormDescriptor":
        data = dict(raw)
        data["fields"] = tuple(FieldDescriptor.from_dict(item) for item in data.get("fields", []))
        return cls(**data)


@dataclass(frozen=True)
class FillResult:
    """Outcome of filling one field."""

    selector: str
    expected_value: str
    observed_value: Optional[str]
    succeeded: bool
    error: Optional[str] = None
    retried: bool = False
    role: Optional[Role] = None

    @property
    def message(self) -> str:
        if self.error:
            return f"Failed to fill {self.selector}: {self.error}"
        if self.succeeded:
            return f"Filled {self.selector} with {self.expected_value!r}"
        return (
            f"Filled {self.selector} but read back {self.observed_value!r} "
            f"instead of {self.expected_value!r}"
        )


@dataclass(frozen=True)
class FillBatchResult:
    """All per-field outcomes of a form fill, in document order."""

    scope: Optional[str]
    results: Tuple[FillResult, ...] = ()
    error: Optional[str] = None

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def success_count(self) -> int:
        return sum(1 for result in self.results if result.succeeded)

    @property
    def message(self) -> str:
        if self.error:
            return f"Failed to fill {self.scope or 'document'}: {self.error}"
        return f"Filled {self.success_count}/{self.total} fields in {self.scope or 'document'}"


@dataclass(frozen=True)
class SubmitCandidate:
    """A discovered, not yet confirmed, submission control."""

    selector: str
    kind: CandidateKind
    text: str = ""
    form_index: Optional[int] = None
    disabled: bool = False


@dataclass(frozen=True)
class SubmitAttempt:
    selector: str
    error: Optional[str] = None


@dataclass(frozen=True)
class SubmitResult:
    """Outcome of the submission fallback chain."""

    succeeded: bool
    method: Optional[str] = None
    candidate: Optional[SubmitCandidate] = None
    attempts: Tuple[SubmitAttempt, ...] = ()
    error: Optional[str] = None
    scope: Optional[str] = None

    @property
    def message(self) -> str:
        target = self.scope or "document"
        if self.succeeded and self.method == "click" and self.candidate:
            return f"Submitted {target} by clicking {self.candidate.selector}"
        if self.succeeded:
            return f"Submitted {target} programmatically"
        return f"Failed to submit {target}: {self.error}"


@dataclass(frozen=True)
class SectionLink:
    text: str
    href: str
    title: Optional[str] = None
    selector: Optional[str] = None


@dataclass(frozen=True)
class SectionRegion:
    tag: str
    selector: str
    id: Optional[str] = None
    class_name: Optional[str] = None
    has_form: bool = False
    text: str = ""


@dataclass(frozen=True)
class SectionReport:
    """Advisory description of where a contact or auth area may be."""

    category: ScanTarget
    links: Tuple[SectionLink, ...] = ()
    regions: Tuple[SectionRegion, ...] = ()
    forms: Tuple[FormDescriptor, ...] = ()
    error: Optional[str] = None

    @property
    def found(self) -> bool:
        return bool(self.links or self.regions or self.forms)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category.value,
            "links": [asdict(link) for link in self.links],
            "regions": [asdict(region) for region in self.regions],
            "forms": [form.to_dict() for form in self.forms],
            "found": self.found,
            "error": self.error,
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "SectionReport":
        return cls(
            category=ScanTarget(raw.get("category", ScanTarget.ALL.value)),
            links=tuple(SectionLink(**item) for item in raw.get("links", [])),
            regions=tuple(SectionRegion(**item) for item in raw.get("regions", [])),
            forms=tuple(FormDescriptor.from_dict(item) for item in raw.get("forms", [])),
            error=raw.get("error"),
        )
