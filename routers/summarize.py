"""
Summarization router.

POST /api/summarize forwards a transcript and instruction to the LLM and
returns the generated summary.
"""

import logging
from fastapi import APIRouter, Depends, Request

from models.error_response import ErrorResponse
from models.summarize_request import SummarizeRequest, SummarizeResponse
from services.summarizer_service import SummarizerService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["summarize"])


def get_summarizer_service(request: Request) -> SummarizerService:
    """Return the SummarizerService created at application startup."""
    return request.app.state.summarizer_service


@router.post(
    "/summarize",
    response_model=SummarizeResponse,
    responses={400: {"model": ErrorResponse}}
)
async def summarize(
    body: SummarizeRequest,
    service: SummarizerService = Depends(get_summarizer_service)
):
    """
    Summarize a meeting transcript.

    Args:
        body: SummarizeRequest with transcript and optional instruction

    Returns:
        SummarizeResponse with the summary text (possibly empty)

    Raises:
        UpstreamError: Converted to HTTP 400 {"error": ...} by the app handler
    """
    summary = await service.summarize(body.transcript, body.instruction)
    return SummarizeResponse(summary=summary)
