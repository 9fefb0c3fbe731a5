"""
Import Wizard - Turn free-form prompt text into a reusable template.

The user marks spans of text and assigns each to a bank (a named pool of
interchangeable options). Compilation rewrites every occurrence of a marked
span into a ``{{bank_id}}`` placeholder and reports the option writes the
bank registry must receive.

Usage:
    from promptbank.core.import_wizard import Category, ImportSession

    session = ImportSession({"character": Category("character", "Character")})
    session.set_text("A futuristic warrior stands. The warrior holds a sword.")
    session.proceed_to_annotate()
    session.add("futuristic warrior", "character", "char1", "Hero", True)
    result = session.confirm()
    # result.final_content == "A {{char1}} stands. The warrior holds a sword."
"""

from .bank_resolver import apply_bank_writes, by_category, merged_banks
from .compiler import (
    compile_template,
    dedupe_bank_writes,
    substitute,
    substitution_targets,
)
from .errors import ImportWizardError, InvalidSelection, InvalidTransition
from .highlight import describe_match, render
from .models import (
    UNCATEGORIZED,
    Bank,
    Category,
    CompileResult,
    ProcessedBank,
    Segment,
    SegmentKind,
    Selection,
    is_well_formed,
    placeholder,
)
from .selection_store import IdFactory, SelectionStore, uuid_id_factory
from .session import NEW_BANK_ID_PREFIX, ImportSession, WizardStep, new_bank_id

__all__ = [
    # Main API
    "ImportSession",
    "SelectionStore",
    "compile_template",
    "render",
    "merged_banks",
    "by_category",
    "apply_bank_writes",
    # Data models
    "Bank",
    "Category",
    "CompileResult",
    "ProcessedBank",
    "Segment",
    "SegmentKind",
    "Selection",
    "WizardStep",
    # Errors
    "ImportWizardError",
    "InvalidSelection",
    "InvalidTransition",
    # Helper functions (for advanced usage)
    "dedupe_bank_writes",
    "substitution_targets",
    "substitute",
    "describe_match",
    "placeholder",
    "is_well_formed",
    "new_bank_id",
    "uuid_id_factory",
    "IdFactory",
    "NEW_BANK_ID_PREFIX",
    "UNCATEGORIZED",
]
