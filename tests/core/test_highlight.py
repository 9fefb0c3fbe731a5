"""Tests for the highlight renderer."""

from types import SimpleNamespace

from promptbank.core.import_wizard import (
    Category,
    Segment,
    SegmentKind,
    Selection,
    describe_match,
    render,
)


def sel(text, bank_id="b", sid=None, category_id="character", bank_name="Hero"):
    return Selection(
        id=sid or text,
        text=text,
        category_id=category_id,
        bank_id=bank_id,
        bank_name=bank_name,
    )


def shape(segments):
    return [(s.text, s.kind.value) for s in segments]


def test_empty_text_has_no_segments():
    assert render("", [sel("warrior")]) == []


def test_no_selections_single_plain_segment():
    assert render("Just text.", []) == [Segment(text="Just text.")]


def test_every_occurrence_becomes_match():
    warrior = sel("warrior")
    segments = render("The warrior and the warrior.", [warrior])

    assert shape(segments) == [
        ("The ", "plain"),
        ("warrior", "match"),
        (" and the ", "plain"),
        ("warrior", "match"),
        (".", "plain"),
    ]
    assert all(s.selection is warrior for s in segments if s.is_match)
    assert all(s.selection is None for s in segments if not s.is_match)


def test_segments_concatenate_back_to_text():
    raw = "warrior warrior, sword-warrior"
    segments = render(raw, [sel("warrior"), sel("sword")])
    assert "".join(s.text for s in segments) == raw


def test_match_at_edges_drops_empty_plain_pieces():
    segments = render("warriorwarrior", [sel("warrior")])
    assert shape(segments) == [("warrior", "match"), ("warrior", "match")]


def test_first_applied_selection_freezes_its_span():
    # Insertion order, not length order: "warrior" is applied first, so the
    # longer "futuristic warrior" can no longer match across the frozen span.
    raw = "A futuristic warrior stands."
    segments = render(raw, [sel("warrior", sid="short"), sel("futuristic warrior", sid="long")])

    assert shape(segments) == [
        ("A futuristic ", "plain"),
        ("warrior", "match"),
        (" stands.", "plain"),
    ]
    assert segments[1].selection.id == "short"


def test_later_selection_inside_matched_span_not_resplit():
    raw = "A futuristic warrior stands."
    segments = render(raw, [sel("futuristic warrior", sid="long"), sel("warrior", sid="short")])

    assert shape(segments) == [
        ("A ", "plain"),
        ("futuristic warrior", "match"),
        (" stands.", "plain"),
    ]
    assert segments[1].selection.id == "long"


def test_absent_selection_is_ignored():
    segments = render("The warrior.", [sel("dragon"), sel("warrior")])
    assert shape(segments) == [("The ", "plain"), ("warrior", "match"), (".", "plain")]


def test_blank_selection_text_is_skipped():
    segments = render("The warrior.", [sel("", sid="blank")])
    assert segments == [Segment(text="The warrior.")]


def test_match_kind_enum():
    [segment] = render("warrior", [sel("warrior")])
    assert segment.kind is SegmentKind.MATCH
    assert segment.is_match


def test_describe_match_uses_category_label():
    categories = {"character": Category("character", "角色 Character")}
    [segment] = render("warrior", [sel("warrior", bank_name="Hero")])

    assert describe_match(segment, categories) == "角色 Character / Hero"


def test_describe_match_falls_back_to_category_id():
    [segment] = render("sword", [sel("sword", category_id="item", bank_name="Weapon")])
    assert describe_match(segment, {}) == "item / Weapon"


def test_describe_plain_segment_is_empty():
    assert describe_match(Segment(text="plain"), {}) == ""


def test_malformed_selections_are_skipped():
    non_string = Selection("x", 5, "character", "b", "Hero")
    missing_fields = SimpleNamespace(text="b", bank_id="bank")

    segments = render("abc", [non_string, missing_fields, sel("c")])

    assert shape(segments) == [("ab", "plain"), ("c", "match")]
