"""
Import wizard API - drive an import session over HTTP.

A session is opened with the caller's categories and bank registry, the text
is authored and annotated, and ``confirm`` returns the compiled template plus
the bank writes the caller must persist. Nothing is stored server-side beyond
the open session.
"""

import logging

from fastapi import APIRouter, Depends, Query

from promptbank.api.v1.helpers.responses import APIResponse, success_response
from promptbank.api.v1.helpers.sessions import get_session_registry, locked_session
from promptbank.config import settings
from promptbank.core.import_wizard import describe_match, new_bank_id
from promptbank.core.session_registry import SessionRegistry
from promptbank.models.pydantic_models.imports import (
    AddSelectionRequest,
    BankEntryOut,
    BankIdOut,
    CompileOut,
    OpenSessionRequest,
    SegmentOut,
    SelectionOut,
    SessionOut,
    SetTextRequest,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def _session_out(session_id: str, session) -> SessionOut:
    return SessionOut.from_session(
        session_id, session, default_category_id=settings.default_category_id
    )


# ---------------------------------------------------------------------------
# Session lifecycle
# ---------------------------------------------------------------------------


@router.post("/bank-ids", response_model=BankIdOut)
async def mint_bank_id():
    """Mint an id for a bank the user is proposing in this import."""
    return BankIdOut(bank_id=new_bank_id(settings.new_bank_id_prefix))


@router.post("/", response_model=SessionOut)
async def open_session(
    request: OpenSessionRequest,
    registry: SessionRegistry = Depends(get_session_registry),
):
    """Open a new import session in the authoring step."""
    session_id, entry = await registry.open(
        request.to_categories(), request.to_banks(), raw_text=request.raw_text
    )
    return _session_out(session_id, entry.session)


@router.get("/{session_id}", response_model=SessionOut)
async def get_session(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
):
    async with locked_session(registry, session_id) as session:
        return _session_out(session_id, session)


@router.delete("/{session_id}", response_model=APIResponse)
async def discard_session(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
):
    """Cancel an import. Unknown sessions are ignored."""
    removed = await registry.discard(session_id)
    return success_response(
        message="Import session discarded." if removed else "No such import session."
    )


# ---------------------------------------------------------------------------
# Wizard steps
# ---------------------------------------------------------------------------


@router.put("/{session_id}/text", response_model=SessionOut)
async def set_text(
    session_id: str,
    request: SetTextRequest,
    registry: SessionRegistry = Depends(get_session_registry),
):
    async with locked_session(registry, session_id) as session:
        session.set_text(request.raw_text)
        return _session_out(session_id, session)


@router.post("/{session_id}/annotate", response_model=SessionOut)
async def proceed_to_annotate(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
):
    async with locked_session(registry, session_id) as session:
        session.proceed_to_annotate()
        return _session_out(session_id, session)


@router.post("/{session_id}/back", response_model=SessionOut)
async def back(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
):
    async with locked_session(registry, session_id) as session:
        session.back()
        return _session_out(session_id, session)


@router.post("/{session_id}/reset", response_model=SessionOut)
async def reset_session(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
):
    """Start the import over with empty text and no selections."""
    async with locked_session(registry, session_id) as session:
        session.begin()
        return _session_out(session_id, session)


# ---------------------------------------------------------------------------
# Selections
# ---------------------------------------------------------------------------


@router.get("/{session_id}/selections", response_model=list[SelectionOut])
async def list_selections(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
):
    async with locked_session(registry, session_id) as session:
        return [SelectionOut.from_selection(s) for s in session.list()]


@router.post("/{session_id}/selections", response_model=SelectionOut)
async def add_selection(
    session_id: str,
    request: AddSelectionRequest,
    registry: SessionRegistry = Depends(get_session_registry),
):
    async with locked_session(registry, session_id) as session:
        selection = session.add(
            text=request.text,
            category_id=request.category_id,
            bank_id=request.bank_id,
            bank_name=request.bank_name,
            is_new_bank=request.is_new_bank,
        )
        return SelectionOut.from_selection(selection)


@router.delete("/{session_id}/selections/{selection_id}", response_model=APIResponse)
async def remove_selection(
    session_id: str,
    selection_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
):
    async with locked_session(registry, session_id) as session:
        session.remove(selection_id)
        return success_response(message="Selection removed.")


# ---------------------------------------------------------------------------
# Projections
# ---------------------------------------------------------------------------


@router.get("/{session_id}/banks", response_model=list[BankEntryOut])
async def list_banks(
    session_id: str,
    category_id: str | None = Query(None, description="Only banks in this category"),
    registry: SessionRegistry = Depends(get_session_registry),
):
    """Existing banks plus banks proposed in this session."""
    async with locked_session(registry, session_id) as session:
        if category_id is None:
            banks = list(session.banks().items())
        else:
            banks = session.banks_for_category(category_id)
        return [
            BankEntryOut(
                bank_id=bank_id,
                label=bank.label,
                category_id=bank.category_id,
                options=list(bank.options),
                is_existing=bank_id in session.existing_banks,
            )
            for bank_id, bank in banks
        ]


@router.get("/{session_id}/highlight", response_model=list[SegmentOut])
async def highlight(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
):
    async with locked_session(registry, session_id) as session:
        return [
            SegmentOut.from_segment(
                segment,
                label=describe_match(segment, session.categories)
                if segment.is_match
                else None,
            )
            for segment in session.highlight()
        ]


# ---------------------------------------------------------------------------
# Compilation
# ---------------------------------------------------------------------------


@router.post("/{session_id}/compile", response_model=CompileOut)
async def preview_compile(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
):
    """Compile without consuming the session."""
    async with locked_session(registry, session_id) as session:
        return CompileOut.from_result(session.compile())


@router.post("/{session_id}/confirm", response_model=CompileOut)
async def confirm(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
):
    """
    Finish the import.

    Returns the template text and the bank writes to persist. The session is
    closed and discarded afterwards.
    """
    async with locked_session(registry, session_id) as session:
        result = session.confirm()
    await registry.discard(session_id)
    logger.info(
        f"Import session {session_id} confirmed: "
        f"{len(result.processed_banks)} bank write(s)"
    )
    return CompileOut.from_result(result)
