"""FastAPI dependencies shared by the fill routes."""

from fastapi import HTTPException, Request

from fills.services import FillSession


def get_fill_session(request: Request) -> FillSession:
    """Return the FillSession owned by the running app."""
    session = getattr(request.app.state, "fill_session", None)
    if session is None or not session.is_active:
        raise HTTPException(status_code=503, detail="Fill session not available")
    return session
