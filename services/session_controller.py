"""SessionController driving the summarizer form.

Each user action follows ``idle -> busy -> idle``. Input problems set a
warning and stop the action before any network call; API failures set the
status message.

The busy guard only matters when one controller is shared across concurrent
calls. The form route builds a fresh state per POST, so there duplicate
submissions are blocked by the page script disabling the clicked button.
"""
import logging

from models.session_state import SessionState
from services.api_client import ApiCallError, ApiClient
from utils.text_utils import has_allowed_extension, markdown_to_html, parse_recipients

logger = logging.getLogger(__name__)

WARN_BAD_FILE = "Please upload a .txt or .md file for this demo."
WARN_NO_TRANSCRIPT = "Please paste or upload a transcript."
WARN_NO_SUMMARY = "Generate or edit a summary first."
WARN_NO_RECIPIENTS = "Enter at least one recipient email (comma-separated)."
STATUS_EMAIL_SENT = "✅ Email sent!"


class SessionController:
    """Applies user actions to a SessionState through the API client."""

    def __init__(self, state: SessionState, api: ApiClient):
        self.state = state
        self.api = api

    def load_file(self, filename: str, content: bytes) -> bool:
        """
        Replace the transcript with an uploaded file's text.

        Args:
            filename: Name of the uploaded file
            content: Raw file bytes

        Returns:
            True if the transcript was replaced, False if the file was rejected
        """
        if not filename:
            return False
        if not has_allowed_extension(filename):
            logger.info(f"Rejected upload: filename={filename}")
            self.state.warning = WARN_BAD_FILE
            return False

        self.state.transcript = content.decode("utf-8", errors="replace")
        logger.info(f"Loaded transcript file: filename={filename}, length={len(self.state.transcript)} chars")
        return True

    async def generate(self) -> None:
        """Request a summary for the current transcript and instruction."""
        if self.state.busy:
            return
        if not self.state.transcript.strip():
            self.state.warning = WARN_NO_TRANSCRIPT
            return

        self.state.busy = True
        self.state.status = ""
        try:
            self.state.summary = await self.api.summarize(
                self.state.transcript,
                self.state.instruction
            )
        except ApiCallError as e:
            self.state.status = e.message
        finally:
            self.state.busy = False

    async def send(self) -> None:
        """Email the current summary, rendered to HTML, to the parsed recipients."""
        if self.state.busy:
            return
        if not self.state.summary.strip():
            self.state.warning = WARN_NO_SUMMARY
            return
        recipients = parse_recipients(self.state.recipients)
        if not recipients:
            self.state.warning = WARN_NO_RECIPIENTS
            return

        self.state.busy = True
        self.state.status = ""
        try:
            html = markdown_to_html(self.state.summary)
            await self.api.send_email(recipients, self.state.subject, html)
            self.state.status = STATUS_EMAIL_SENT
        except ApiCallError as e:
            self.state.status = e.message
        finally:
            self.state.busy = False
