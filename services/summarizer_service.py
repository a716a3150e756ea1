"""SummarizerService for turning raw meeting transcripts into structured notes.

This service forwards a transcript and a user instruction to an
OpenAI-compatible chat completion API (Groq by default) and returns the text
of the first choice.
"""
import logging
from openai import AsyncOpenAI, OpenAIError

from models.summarize_request import DEFAULT_INSTRUCTION
from services.errors import UpstreamError


logger = logging.getLogger(__name__)

SUMMARY_TEMPERATURE = 0.3

SYSTEM_PROMPT = """You are a world-class meeting-notes summarizer. Given a raw transcript and a user instruction, produce a structured, factual summary. Always include:
- Title
- Participants (if present)
- Date (if present)
- TL;DR (3–5 bullets)
- Key Points (bulleted)
- Decisions
- Action Items (with owner and due date if available)
- Risks/Notes
Keep it concise, neutral, and do not invent facts."""


class SummarizerService:
    """Service for summarizing transcripts with an LLM chat API.

    The client is created once at application startup and passed in, so the
    service holds no state of its own beyond the model name.
    """

    def __init__(self, client: AsyncOpenAI, model: str):
        """Initialize the SummarizerService with a chat client and model name."""
        self.client = client
        self.model = model
        logger.info(f"SummarizerService initialized with model: {self.model}")

    async def summarize(
        self,
        transcript: str,
        instruction: str = DEFAULT_INSTRUCTION
    ) -> str:
        """Summarize a transcript under the given instruction.

        Args:
            transcript: The raw meeting transcript
            instruction: Directive shaping tone and focus of the summary

        Returns:
            Summary text from the first choice, or "" when the API returned
            no choices or no content

        Raises:
            UpstreamError: If the chat completion call fails
        """
        logger.info(
            f"Summarizing transcript: model={self.model}, "
            f"transcript_length={len(transcript)} chars, "
            f"instruction_length={len(instruction)} chars"
        )

        try:
            completion = await self.client.chat.completions.create(
                model=self.model,
                temperature=SUMMARY_TEMPERATURE,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": self.build_user_prompt(transcript, instruction)}
                ]
            )
        except OpenAIError as e:
            logger.error(f"Summarization failed: model={self.model}, error={e}", exc_info=True)
            raise UpstreamError(str(e) or "Failed to summarize") from e

        summary = self._first_choice_content(completion)
        logger.info(f"Summarization complete: summary_length={len(summary)} chars")
        return summary

    @staticmethod
    def build_user_prompt(transcript: str, instruction: str) -> str:
        """Combine instruction and transcript into the user message."""
        return f"Instruction: {instruction}\n\nTranscript:\n{transcript}"

    @staticmethod
    def _first_choice_content(completion) -> str:
        choices = getattr(completion, "choices", None)
        if not choices:
            return ""
        message = getattr(choices[0], "message", None)
        return getattr(message, "content", None) or ""
