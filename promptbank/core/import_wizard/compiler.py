"""
Template compiler - turn raw prompt text and selections into a template.

Two deduplication passes run independently over the same selection list:

- bank writes are keyed by ``(bank_id, text)`` and the FIRST selection wins,
  so re-marking a span for the same bank never duplicates an option;
- substitution targets are keyed by ``text`` alone and the LAST selection
  wins, so the most recent bank assignment decides the placeholder.

The passes are not reconciled. If "X" is assigned to bank A and later to bank
B, every "X" becomes ``{{B}}`` while the ``(A, "X")`` write is still emitted.

Usage:
    from promptbank.core.import_wizard import compile_template

    result = compile_template("The warrior holds a sword.", store.list())
    print(result.summary())
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .models import (
    CompileResult,
    ProcessedBank,
    Selection,
    is_well_formed,
    placeholder,
)

logger = logging.getLogger(__name__)


def dedupe_bank_writes(selections: Iterable[Selection]) -> list[ProcessedBank]:
    """First selection per ``(bank_id, text)`` wins; order of first occurrence."""
    seen: dict[tuple[str, str], ProcessedBank] = {}
    for selection in selections:
        key = (selection.bank_id, selection.text)
        if key in seen:
            continue
        seen[key] = ProcessedBank(
            bank_id=selection.bank_id,
            bank_name=selection.bank_name,
            category_id=selection.category_id,
            option_text=selection.text,
            is_new_bank=selection.is_new_bank,
        )
    return list(seen.values())


def substitution_targets(selections: Iterable[Selection]) -> list[Selection]:
    """
    Resolve which selection decides the placeholder for each distinct text.

    The last selection per text wins. Entries are returned longest text
    first; equal lengths keep the position at which the text first appeared.
    """
    by_text: dict[str, Selection] = {}
    for selection in selections:
        # Re-assigning an existing key keeps its original position.
        by_text[selection.text] = selection
    # sorted() is stable, so ties keep first-appearance order.
    return sorted(by_text.values(), key=lambda s: len(s.text), reverse=True)


def substitute(raw_text: str, targets: Iterable[Selection]) -> str:
    """Replace every literal occurrence of each target's text, in order."""
    content = raw_text
    for target in targets:
        # str.replace matches literally; selected text is never a pattern.
        content = content.replace(target.text, placeholder(target.bank_id))
    return content


def compile_template(
    raw_text: str, selections: Iterable[Selection]
) -> CompileResult:
    """
    Compile raw text and selections into a template and bank writes.

    Args:
        raw_text: The text the selections were made against
        selections: Selections in insertion order

    Returns:
        CompileResult with the templated text and the deduplicated bank
        writes. Never raises for malformed selections; they are skipped.
    """
    valid: list[Selection] = []
    for selection in selections:
        if is_well_formed(selection):
            valid.append(selection)
        else:
            logger.warning(f"Skipping malformed selection during compile: {selection!r}")

    processed_banks = dedupe_bank_writes(valid)
    final_content = substitute(raw_text or "", substitution_targets(valid))

    logger.debug(
        f"Compiled template with {len(processed_banks)} bank write(s) "
        f"from {len(valid)} selection(s)"
    )
    return CompileResult(final_content=final_content, processed_banks=processed_banks)
