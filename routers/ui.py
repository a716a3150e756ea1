"""
Form page router.

GET / renders the summarizer form. POST / applies one user action to the
posted form state and renders the result:

- ``upload``: load a .txt/.md file into the transcript
- ``generate``: summarize the transcript via POST /api/summarize
- ``send``: email the summary via POST /api/send-email
"""
import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from models.session_state import SessionState
from services.api_client import ApiClient
from services.errors import InvalidRequestError
from services.session_controller import SessionController

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ui"])

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


def get_api_client(request: Request) -> ApiClient:
    """Return the ApiClient created at application startup."""
    return request.app.state.api_client


def render_form(request: Request, state: SessionState) -> HTMLResponse:
    return templates.TemplateResponse(request, "index.html", {"state": state})


@router.get("/", response_class=HTMLResponse)
async def show_form(request: Request):
    return render_form(request, SessionState())


@router.post("/", response_class=HTMLResponse)
async def submit_form(
    request: Request,
    action: str = Form(...),
    transcript: str = Form(""),
    instruction: str = Form(""),
    summary: str = Form(""),
    recipients: str = Form(""),
    subject: str = Form(""),
    file: Optional[UploadFile] = File(None),
    api: ApiClient = Depends(get_api_client)
):
    state = SessionState(
        transcript=transcript,
        instruction=instruction,
        summary=summary,
        recipients=recipients,
        subject=subject
    )
    controller = SessionController(state, api)
    logger.info(f"Form action received: action={action}")

    if action == "upload":
        if file is not None and file.filename:
            controller.load_file(file.filename, await file.read())
    elif action == "generate":
        await controller.generate()
    elif action == "send":
        await controller.send()
    else:
        raise InvalidRequestError(f"Unknown action: {action}")

    return render_form(request, state)
