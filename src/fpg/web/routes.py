"""API routes for the web dashboard.

The page keeps one server-side session per browser tab.  A session
holds the uploaded rows and the current options; every option change
is followed by a fresh ``GET .../payload`` that recomputes the chart
from scratch.  ``POST /api/render`` offers the same computation without
a session for scripted use.
"""

from __future__ import annotations

import uuid
from typing import Dict, List, Optional

from fastapi import APIRouter, File, HTTPException, UploadFile
from pydantic import BaseModel, Field, ValidationError

from ..core.models import ColorConfig, PlotOptions, RawRow, RenderPayload
from ..plot.payload import build_payload, default_colors
from ..session import ForestPlotSession
from ..utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api")

# In-memory registry of sessions keyed by session ID.  Nothing is
# written to disk; restarting the server forgets every upload.
active_sessions: Dict[str, ForestPlotSession] = {}


class OptionsUpdate(BaseModel):
    """Partial update of the plot options."""

    is_ratio: Optional[bool] = None
    mirror_x: Optional[bool] = None
    x_label: Optional[str] = None
    marker_scale: Optional[float] = Field(None, gt=0)


class ColorsUpdate(BaseModel):
    """Partial update of the chart colors."""

    marker_color: Optional[str] = None
    marker_opacity: Optional[float] = Field(None, ge=0.0, le=1.0)
    ci_color: Optional[str] = None
    reference_color: Optional[str] = None


class RenderRequest(BaseModel):
    """Rows and options for a one-off render."""

    rows: List[RawRow]
    options: PlotOptions = Field(default_factory=PlotOptions)
    colors: Optional[ColorConfig] = None


def _get_session(session_id: str) -> ForestPlotSession:
    session = active_sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


def _session_state(session_id: str, session: ForestPlotSession) -> Dict[str, object]:
    return {
        "session_id": session_id,
        "file_name": session.file_name,
        "rows": len(session.rows),
        "options": session.options.model_dump(),
        "colors": session.colors.model_dump(),
    }


@router.post("/sessions")
async def create_session() -> Dict[str, object]:
    """Register a new empty session."""
    session_id = uuid.uuid4().hex
    session = ForestPlotSession()
    active_sessions[session_id] = session
    return _session_state(session_id, session)


@router.get("/sessions/{session_id}")
async def get_session(session_id: str) -> Dict[str, object]:
    return _session_state(session_id, _get_session(session_id))


@router.post("/sessions/{session_id}/upload")
async def upload_csv(session_id: str, file: UploadFile = File(...)) -> Dict[str, object]:
    """Load a CSV into the session.

    A file that fails to parse leaves the previously loaded rows in
    place and returns 400.
    """
    session = _get_session(session_id)
    content = await file.read()
    if not session.load_csv(content, file_name=file.filename):
        raise HTTPException(status_code=400, detail=f"Could not parse {file.filename or 'CSV file'}")
    return _session_state(session_id, session)


@router.delete("/sessions/{session_id}/rows")
async def clear_rows(session_id: str) -> Dict[str, object]:
    """Remove the uploaded data from the session."""
    session = _get_session(session_id)
    session.clear()
    return _session_state(session_id, session)


@router.patch("/sessions/{session_id}/options")
async def update_options(session_id: str, update: OptionsUpdate) -> Dict[str, object]:
    session = _get_session(session_id)
    try:
        session.update_options(**update.model_dump(exclude_none=True))
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return _session_state(session_id, session)


@router.patch("/sessions/{session_id}/colors")
async def update_colors(session_id: str, update: ColorsUpdate) -> Dict[str, object]:
    session = _get_session(session_id)
    try:
        session.update_colors(**update.model_dump(exclude_none=True))
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return _session_state(session_id, session)


@router.get("/sessions/{session_id}/payload", response_model=RenderPayload)
async def session_payload(session_id: str) -> RenderPayload:
    """Traces, layout, colors and label table for the current inputs."""
    return _get_session(session_id).payload()


@router.post("/render", response_model=RenderPayload)
async def render(request: RenderRequest) -> RenderPayload:
    """Compute a render payload without a session."""
    return build_payload(request.rows, request.options, request.colors or default_colors())
