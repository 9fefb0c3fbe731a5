"""
Data models for the import wizard.

Everything here is an immutable value object. Categories and banks are
supplied by the caller, selections are created by ``SelectionStore``, and
segments / compile results are projections that never feed back into the
source data.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

# Category assumed for banks that carry no category of their own.
UNCATEGORIZED = "other"

PLACEHOLDER_OPEN = "{{"
PLACEHOLDER_CLOSE = "}}"


def placeholder(bank_id: str) -> str:
    """Return the template token that stands in for a bank."""
    return f"{PLACEHOLDER_OPEN}{bank_id}{PLACEHOLDER_CLOSE}"


@dataclass(frozen=True)
class Category:
    """A taxonomy label grouping banks (e.g. character, item)."""

    id: str
    label: str
    color_tag: str | None = None


@dataclass(frozen=True)
class Bank:
    """A named pool of interchangeable options, keyed by bank id in a registry."""

    label: str
    category_id: str | None = None
    options: tuple[str, ...] = ()

    @property
    def effective_category_id(self) -> str:
        return self.category_id or UNCATEGORIZED


@dataclass(frozen=True)
class Selection:
    """A pending assignment of one extracted text span to a category and bank."""

    id: str
    text: str
    category_id: str
    bank_id: str
    bank_name: str
    is_new_bank: bool = False


def is_well_formed(selection: object) -> bool:
    """True when a record carries every field compile and render read.

    Records that bypassed ``SelectionStore.add`` may lack fields or carry
    the wrong types; callers skip those instead of faulting.
    """
    text = getattr(selection, "text", None)
    bank_id = getattr(selection, "bank_id", None)
    return (
        isinstance(text, str)
        and bool(text)
        and isinstance(bank_id, str)
        and bool(bank_id)
        and all(
            hasattr(selection, name)
            for name in ("bank_name", "category_id", "is_new_bank")
        )
    )


class SegmentKind(str, Enum):
    PLAIN = "plain"
    MATCH = "match"


@dataclass(frozen=True)
class Segment:
    """A contiguous run of characters used for highlight rendering."""

    text: str
    kind: SegmentKind = SegmentKind.PLAIN
    selection: Selection | None = None

    @property
    def is_match(self) -> bool:
        return self.kind is SegmentKind.MATCH


@dataclass(frozen=True)
class ProcessedBank:
    """One bank write the persistence layer must apply after compilation."""

    bank_id: str
    bank_name: str
    category_id: str
    option_text: str
    is_new_bank: bool

    @property
    def key(self) -> tuple[str, str]:
        return (self.bank_id, self.option_text)


@dataclass(frozen=True)
class CompileResult:
    """Final template text plus the deduplicated bank writes."""

    final_content: str
    processed_banks: list[ProcessedBank] = field(default_factory=list)

    def summary(self) -> str:
        """Return a human-readable summary."""
        lines = [f"Template: {self.final_content!r}"]
        for entry in self.processed_banks:
            marker = " (new)" if entry.is_new_bank else ""
            lines.append(
                f"  - {entry.bank_name}{marker} [{entry.bank_id}] <- {entry.option_text!r}"
            )
        return "\n".join(lines)
