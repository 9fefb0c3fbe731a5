"""
Import session - the two-step wizard around a SelectionStore.

A session starts in AUTHORING (the user pastes text), moves to ANNOTATING
once the text is non-blank (the user marks spans), and is consumed by
``confirm()``, which compiles exactly once and closes the session.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from enum import Enum

from .bank_resolver import by_category, merged_banks
from .compiler import compile_template
from .errors import InvalidTransition
from .highlight import render
from .models import Bank, Category, CompileResult, Segment, Selection
from .selection_store import IdFactory, SelectionStore, uuid_id_factory

logger = logging.getLogger(__name__)

NEW_BANK_ID_PREFIX = "bank_"


def new_bank_id(prefix: str = NEW_BANK_ID_PREFIX) -> str:
    """Mint an id for a bank proposed during the session."""
    return f"{prefix}{uuid.uuid4()}"


class WizardStep(str, Enum):
    AUTHORING = "authoring"
    ANNOTATING = "annotating"


class ImportSession:
    """One user's import: raw text, pending selections and the wizard step."""

    def __init__(
        self,
        categories: Mapping[str, Category],
        existing_banks: Mapping[str, Bank] | None = None,
        raw_text: str = "",
        id_factory: IdFactory = uuid_id_factory,
    ):
        self.categories = dict(categories)
        self.existing_banks = dict(existing_banks or {})
        self.raw_text = raw_text
        self.step = WizardStep.AUTHORING
        self.closed = False
        self.store = SelectionStore(self.categories, id_factory=id_factory)

    def _ensure_open(self) -> None:
        if self.closed:
            raise InvalidTransition("Import session has already been confirmed")

    # -------------------------------------------------------------------------
    # Wizard transitions
    # -------------------------------------------------------------------------

    def begin(self) -> None:
        """Start over: empty text, no selections, back to AUTHORING."""
        self._ensure_open()
        self.raw_text = ""
        self.store.reset()
        self.step = WizardStep.AUTHORING

    def set_text(self, raw_text: str) -> None:
        self._ensure_open()
        if self.step is not WizardStep.AUTHORING:
            raise InvalidTransition("Text can only be edited while authoring")
        self.raw_text = raw_text

    def proceed_to_annotate(self) -> None:
        self._ensure_open()
        if self.step is not WizardStep.AUTHORING:
            raise InvalidTransition(f"Cannot annotate from step {self.step.value!r}")
        if not self.raw_text.strip():
            raise InvalidTransition("Paste some text before annotating")
        self.step = WizardStep.ANNOTATING

    def back(self) -> None:
        """Return to AUTHORING. Selections are kept."""
        self._ensure_open()
        if self.step is not WizardStep.ANNOTATING:
            raise InvalidTransition(f"Cannot go back from step {self.step.value!r}")
        self.step = WizardStep.AUTHORING

    def confirm(self) -> CompileResult:
        """Compile the session once and close it."""
        self._ensure_open()
        if self.step is not WizardStep.ANNOTATING:
            raise InvalidTransition("Only an annotated import can be confirmed")
        result = self.compile()
        self.store.reset()
        self.closed = True
        logger.info(
            f"Import confirmed with {len(result.processed_banks)} bank write(s)"
        )
        return result

    # -------------------------------------------------------------------------
    # Selection API
    # -------------------------------------------------------------------------

    def reset(self) -> None:
        self._ensure_open()
        self.store.reset()

    def add(
        self,
        text: str,
        category_id: str,
        bank_id: str,
        bank_name: str,
        is_new_bank: bool = False,
    ) -> Selection:
        self._ensure_open()
        return self.store.add(text, category_id, bank_id, bank_name, is_new_bank)

    def remove(self, selection_id: str) -> None:
        self._ensure_open()
        self.store.remove(selection_id)

    def list(self) -> tuple[Selection, ...]:
        return self.store.list()

    def compile(self, raw_text: str | None = None) -> CompileResult:
        """Compile against ``raw_text`` (defaults to the session's text)."""
        text = self.raw_text if raw_text is None else raw_text
        return compile_template(text, self.store.list())

    # -------------------------------------------------------------------------
    # Projections
    # -------------------------------------------------------------------------

    def banks(self) -> dict[str, Bank]:
        return merged_banks(self.existing_banks, self.store.list())

    def banks_for_category(self, category_id: str) -> list[tuple[str, Bank]]:
        return by_category(self.banks(), category_id)

    def highlight(self) -> list[Segment]:
        return render(self.raw_text, self.store.list())
