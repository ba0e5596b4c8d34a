"""Rule base class — an atomic check evaluated against one subject."""

from __future__ import annotations

from typing import ClassVar, Generic, TypeVar

SubjectT = TypeVar("SubjectT")


def label_for(cls: type) -> str:
    """Description for reports: explicit, else first line of the class docstring."""
    description = getattr(cls, "description", "")
    if description:
        return description
    doc = cls.__dict__.get("__doc__")
    return doc.strip().splitlines()[0] if doc and doc.strip() else ""


class Rule(Generic[SubjectT]):
    """A single business-rule check.

    Every concrete rule implements ``satisfied``. ``not_applicable`` and
    ``forceable`` default to the permissive answer and are overridden only by
    rules that need them. ``applicable`` is derived and should not be
    overridden.
    """

    description: ClassVar[str] = ""

    def __init__(self, subject: SubjectT) -> None:
        self._subject = subject

    @property
    def subject(self) -> SubjectT:
        return self._subject

    def satisfied(self) -> bool:
        raise NotImplementedError(
            f"{type(self).__name__} must implement satisfied()"
        )

    def not_applicable(self) -> bool:
        return False

    def applicable(self) -> bool:
        return not self.not_applicable()

    def forceable(self) -> bool:
        return True

    @classmethod
    def label(cls) -> str:
        return label_for(cls)

    def __repr__(self) -> str:
        return f"<{type(self).__name__}>"
