"""
Bank registry projections.

``merged_banks`` answers "which banks exist right now" for pickers, including
banks proposed in the current session but not yet committed. It never fills
options from selections: option population is the compiler's job.

``apply_bank_writes`` is the reference merge for the downstream write
contract. It returns a new registry and leaves its input untouched.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from .models import Bank, ProcessedBank, Selection


def merged_banks(
    existing_registry: Mapping[str, Bank],
    selections: Iterable[Selection],
) -> dict[str, Bank]:
    """
    Merge the persisted registry with banks proposed by new-bank selections.

    Args:
        existing_registry: bank_id -> Bank, read-only
        selections: Selections in insertion order

    Returns:
        A fresh dict; proposed banks are appended after existing ones with no
        options. When several selections propose the same bank id, the first
        one names it.
    """
    banks = dict(existing_registry)
    for selection in selections:
        if selection.is_new_bank and selection.bank_id not in banks:
            banks[selection.bank_id] = Bank(
                label=selection.bank_name,
                category_id=selection.category_id,
                options=(),
            )
    return banks


def by_category(
    banks: Mapping[str, Bank], category_id: str
) -> list[tuple[str, Bank]]:
    """Banks belonging to a category, in the mapping's iteration order.

    Banks without a category are treated as belonging to ``"other"``.
    """
    return [
        (bank_id, bank)
        for bank_id, bank in banks.items()
        if bank.effective_category_id == category_id
    ]


def apply_bank_writes(
    existing_registry: Mapping[str, Bank],
    processed_banks: Iterable[ProcessedBank],
) -> dict[str, Bank]:
    """
    Apply compiled bank writes to a copy of the registry.

    New banks are created when absent; each option is appended only if the
    bank does not already hold it.
    """
    registry = dict(existing_registry)
    for entry in processed_banks:
        bank = registry.get(entry.bank_id)
        if bank is None:
            if not entry.is_new_bank:
                # Writes to a bank that no longer exists are dropped.
                continue
            bank = Bank(label=entry.bank_name, category_id=entry.category_id)

        if entry.option_text not in bank.options:
            bank = Bank(
                label=bank.label,
                category_id=bank.category_id,
                options=bank.options + (entry.option_text,),
            )
        registry[entry.bank_id] = bank
    return registry
