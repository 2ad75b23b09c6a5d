from __future__ import annotations

from typing import Iterable, Optional, Tuple

from pydantic import BaseModel, computed_field


class FieldError(BaseModel):
    """A single constraint violation attached to a UI field path."""

    field: str
    message: str
    rule: Optional[str] = None

    model_config = {"extra": "forbid", "frozen": True}

    @property
    def is_cross_field(self) -> bool:
        """Return True when the error came from a multi-field rule."""

        return self.rule is not None


class ValidationReport(BaseModel):
    """Ordered outcome of validating a survey configuration."""

    errors: Tuple[FieldError, ...] = ()

    model_config = {"extra": "forbid", "frozen": True}

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_valid(self) -> bool:
        return not self.errors

    @classmethod
    def from_errors(cls, errors: Iterable[FieldError]) -> "ValidationReport":
        return cls(errors=tuple(errors))

    @property
    def fields(self) -> Tuple[str, ...]:
        """Return the blamed paths in report order, repeats included."""

        return tuple(error.field for error in self.errors)

    @property
    def first_error(self) -> FieldError | None:
        return self.errors[0] if self.errors else None

    def errors_for(self, path: str) -> Tuple[FieldError, ...]:
        """Return every error attached to ``path``."""

        return tuple(error for error in self.errors if error.field == path)

    def restricted_to(self, paths: Iterable[str]) -> "ValidationReport":
        """Return a report holding only errors attached to ``paths``."""

        allowed = set(paths)
        return ValidationReport.from_errors(error for error in self.errors if error.field in allowed)
