"""
Session access helpers for import endpoints.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Request

from promptbank.api.v1.helpers.responses import raise_for_error
from promptbank.core.import_wizard import ImportSession, ImportWizardError
from promptbank.core.session_registry import SessionNotFound, SessionRegistry


def get_session_registry(request: Request) -> SessionRegistry:
    return request.app.state.session_registry


@asynccontextmanager
async def locked_session(
    registry: SessionRegistry, session_id: str
) -> AsyncIterator[ImportSession]:
    """
    Yield a session while holding its lock.

    Core errors raised inside the block are turned into HTTP errors.
    """
    try:
        entry = await registry.get(session_id)
    except SessionNotFound as e:
        raise_for_error(e)

    async with entry.lock:
        if entry.session.closed:
            raise_for_error(SessionNotFound(session_id))
        try:
            yield entry.session
        except ImportWizardError as e:
            raise_for_error(e)
