"""
Summarize Request/Response Models

This module defines the Pydantic models for the summarization endpoint.
These models handle validation and serialization for the POST /api/summarize API.
"""

from typing import Optional
from pydantic import BaseModel, Field, field_validator

DEFAULT_INSTRUCTION = "Summarize clearly with decisions and action items."


class SummarizeRequest(BaseModel):
    """
    Request body for the summarization endpoint.

    Attributes:
        transcript: Raw meeting transcript (required, must not be empty or whitespace-only)
        instruction: Directive shaping the summary (default: DEFAULT_INSTRUCTION)
    """
    transcript: str = Field(
        ...,
        description="Raw meeting transcript"
    )
    instruction: Optional[str] = Field(
        default=DEFAULT_INSTRUCTION,
        description="Directive shaping tone and focus of the summary"
    )

    @field_validator('transcript')
    @classmethod
    def transcript_must_not_be_empty(cls, v: str) -> str:
        """Validate that transcript is not empty or whitespace-only."""
        if not v or not v.strip():
            raise ValueError("transcript field cannot be empty or contain only whitespace")
        return v

    @field_validator('instruction')
    @classmethod
    def default_missing_instruction(cls, v: Optional[str]) -> str:
        """An explicit null instruction falls back to the default."""
        return DEFAULT_INSTRUCTION if v is None else v


class SummarizeResponse(BaseModel):
    """
    Response from the summarization endpoint.

    Attributes:
        summary: Generated summary text; empty when the model returned nothing
    """
    summary: str = Field(
        ...,
        description="Generated summary text"
    )
