"""
Static site fallback.

Registered last: any GET path no other route matched is served from the
prebuilt frontend bundle directory when present, falling back to the bundle's
index.html and then to the built-in form page. Unknown /api/ paths get a JSON
404 instead.
"""
import logging
from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse, JSONResponse

from models.session_state import SessionState
from routers.ui import render_form

logger = logging.getLogger(__name__)

router = APIRouter(tags=["site"])


@router.get("/{full_path:path}", include_in_schema=False)
async def serve_site(full_path: str, request: Request):
    if full_path == "api" or full_path.startswith("api/"):
        return JSONResponse(status_code=404, content={"error": "Not found"})

    static_dir = Path(request.app.state.settings.static_dir).resolve()
    if static_dir.is_dir():
        candidate = (static_dir / full_path).resolve()
        if full_path and candidate.is_file() and candidate.is_relative_to(static_dir):
            return FileResponse(candidate)
        index = static_dir / "index.html"
        if index.is_file():
            return FileResponse(index)

    return render_form(request, SessionState())
