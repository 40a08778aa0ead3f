"""Serializable result of a scan run."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from .models import FormDescriptor, SectionReport


@dataclass(frozen=True)
class ScanReport:
    """Forms and section hints found on one document."""

    url: str = ""
    title: str = ""
    forms: Tuple[FormDescriptor, ...] = ()
    contact: Optional[SectionReport] = None
    auth: Optional[SectionReport] = None
    error: Optional[str] = None

    @property
    def field_count(self) -> int:
        return sum(len(form.fields) for form in self.forms)

    @property
    def message(self) -> str:
        if self.error:
            return f"Scan of {self.url or 'page'} failed: {self.error}"
        return f"Found {len(self.forms)} form(s) with {self.field_count} field(s) on {self.url or 'page'}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "title": self.title,
            "forms": [form.to_dict() for form in self.forms],
            "contact": self.contact.to_dict() if self.contact else None,
            "auth": self.auth.to_dict() if self.auth else None,
            "error": self.error,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=4)

    def save(self, path: Path) -> None:
        path.write_text(self.to_json(), encoding="utf-8")

    @classmethod
    def load(cls, path: Path) -> "ScanReport":
        raw = json.loads(path.read_text(encoding="utf-8"))
        return cls(
            url=raw.get("url", ""),
            title=raw.get("title", ""),
            forms=tuple(FormDescriptor.from_dict(item) for item in raw.get("forms", [])),
            contact=SectionReport.from_dict(raw["contact"]) if raw.get("contact") else None,
            auth=SectionReport.from_dict(raw["auth"]) if raw.get("auth") else None,
            error=raw.get("error"),
        )
