"""
Highlight projection of raw text and selections.

Selections are applied in insertion order and a span, once matched, is frozen:
a later selection whose text lies inside an already-matched span does not
re-split it. This differs on purpose from the compiler, which substitutes
longest text first.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from .models import Category, Segment, SegmentKind, Selection, is_well_formed


def _split_plain(segment: Segment, selection: Selection) -> list[Segment]:
    pieces = segment.text.split(selection.text)
    result: list[Segment] = []
    for i, piece in enumerate(pieces):
        if i > 0:
            result.append(
                Segment(
                    text=selection.text,
                    kind=SegmentKind.MATCH,
                    selection=selection,
                )
            )
        if piece:
            result.append(Segment(text=piece))
    return result


def render(raw_text: str, selections: Iterable[Selection]) -> list[Segment]:
    """
    Split raw text into plain and match segments.

    Args:
        raw_text: The text being annotated
        selections: Selections in insertion order

    Returns:
        Segments whose texts concatenate back to ``raw_text``. Empty text
        yields no segments.
    """
    if not raw_text:
        return []

    segments = [Segment(text=raw_text)]
    for selection in selections:
        if not is_well_formed(selection):
            continue
        next_segments: list[Segment] = []
        for segment in segments:
            if segment.is_match:
                next_segments.append(segment)
            else:
                next_segments.extend(_split_plain(segment, selection))
        segments = next_segments
    return segments


def describe_match(segment: Segment, categories: Mapping[str, Category]) -> str:
    """Hover label for a match segment: ``"<category> / <bank name>"``."""
    if segment.selection is None:
        return ""
    selection = segment.selection
    category = categories.get(selection.category_id)
    category_label = category.label if category and category.label else selection.category_id
    return f"{category_label} / {selection.bank_name}"
