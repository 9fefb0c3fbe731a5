"""
Session-scoped accumulator of pending selections.

Insertion order is significant: it is the axis both deduplication passes of
the compiler run along, and the order the highlight renderer applies
selections in.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Iterator, Mapping

from .errors import InvalidSelection
from .models import PLACEHOLDER_CLOSE, Category, Selection

logger = logging.getLogger(__name__)

IdFactory = Callable[[], str]


def uuid_id_factory() -> str:
    return str(uuid.uuid4())


class SelectionStore:
    """Ordered, mutable list of selections for a single import session.

    Not safe for concurrent mutation; callers serialize access per session.
    """

    def __init__(
        self,
        categories: Mapping[str, Category],
        id_factory: IdFactory = uuid_id_factory,
    ):
        self._categories = categories
        self._id_factory = id_factory
        self._selections: list[Selection] = []

    def __len__(self) -> int:
        return len(self._selections)

    def __iter__(self) -> Iterator[Selection]:
        return iter(list(self._selections))

    def _validate(self, text: str, category_id: str, bank_id: str) -> None:
        if not text or not text.strip():
            raise InvalidSelection("Selection text must not be empty")
        if category_id not in self._categories:
            raise InvalidSelection(f"Unknown category: {category_id!r}")
        if not bank_id:
            raise InvalidSelection("Bank id must not be empty")
        if PLACEHOLDER_CLOSE in bank_id:
            raise InvalidSelection(
                f"Bank id must not contain {PLACEHOLDER_CLOSE!r}: {bank_id!r}"
            )

    def add(
        self,
        text: str,
        category_id: str,
        bank_id: str,
        bank_name: str,
        is_new_bank: bool = False,
    ) -> Selection:
        """
        Append a new selection and return it.

        Raises:
            InvalidSelection: if the text is blank, the category is unknown,
                or the bank id cannot be used inside a placeholder.
        """
        self._validate(text, category_id, bank_id)

        selection_id = self._id_factory()
        if self.get(selection_id) is not None:
            raise InvalidSelection(f"Duplicate selection id: {selection_id!r}")

        selection = Selection(
            id=selection_id,
            text=text,
            category_id=category_id,
            bank_id=bank_id,
            bank_name=bank_name,
            is_new_bank=is_new_bank,
        )
        self._selections.append(selection)
        logger.debug(f"Added selection {selection_id} ({text!r} -> {bank_id})")
        return selection

    def remove(self, selection_id: str) -> None:
        """Remove a selection by id. Unknown ids are ignored."""
        before = len(self._selections)
        self._selections = [s for s in self._selections if s.id != selection_id]
        if len(self._selections) == before:
            logger.debug(f"remove() ignored unknown selection {selection_id}")

    def get(self, selection_id: str) -> Selection | None:
        for selection in self._selections:
            if selection.id == selection_id:
                return selection
        return None

    def list(self) -> tuple[Selection, ...]:
        """All selections in insertion order."""
        return tuple(self._selections)

    def reset(self) -> None:
        self._selections = []
