"""Actions that change the page: filling fields and submitting forms."""

from .filler import FieldFiller
from .submitter import FormSubmitter
from .values import provide_value

__all__ = ["FieldFiller", "FormSubmitter", "provide_value"]
