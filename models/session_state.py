"""UI session state for the summarizer form."""
from dataclasses import dataclass

DEFAULT_UI_INSTRUCTION = (
    "Summarize in bullet points for executives and highlight only action items."
)
DEFAULT_UI_SUBJECT = "Meeting Summary"


@dataclass
class SessionState:
    """
    Mutable state behind one rendering of the form.

    Attributes:
        transcript: Transcript text as pasted or loaded from a file
        instruction: Custom summarization instruction
        summary: Generated (and possibly edited) summary in Markdown
        recipients: Raw comma-separated recipient text
        subject: Email subject
        busy: True while a proxy call is in flight
        status: Result of the last action (error message or success notice)
        warning: Input problem that stopped an action before any network call
    """
    transcript: str = ""
    instruction: str = DEFAULT_UI_INSTRUCTION
    summary: str = ""
    recipients: str = ""
    subject: str = DEFAULT_UI_SUBJECT
    busy: bool = False
    status: str = ""
    warning: str = ""
