"""HTTP client the form page uses to reach the summarize and email endpoints."""
import logging
from typing import Any, Dict, List

import httpx

logger = logging.getLogger(__name__)


class ApiCallError(Exception):
    """Raised when an API call fails; ``message`` is shown to the user as-is."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ApiClient:
    """Thin wrapper over httpx.AsyncClient for the two proxy endpoints."""

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def summarize(self, transcript: str, instruction: str) -> str:
        data = await self._post(
            "/api/summarize",
            {"transcript": transcript, "instruction": instruction}
        )
        return data.get("summary") or ""

    async def send_email(
        self,
        recipients: List[str],
        subject: str,
        html: str
    ) -> Dict[str, Any]:
        return await self._post(
            "/api/send-email",
            {"recipients": recipients, "subject": subject, "html": html}
        )

    async def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        POST a JSON payload and return the decoded response.

        Raises:
            ApiCallError: With the server's ``error`` message, the network
                failure message, or a generic status message
        """
        try:
            response = await self.client.post(path, json=payload)
        except httpx.HTTPError as e:
            logger.warning(f"API call did not reach the server: path={path}, error={e}")
            raise ApiCallError(str(e) or type(e).__name__) from e

        if response.is_error:
            try:
                message = response.json().get("error")
            except (ValueError, AttributeError):
                message = None
            logger.warning(f"API call failed: path={path}, status={response.status_code}")
            raise ApiCallError(message or f"Request failed with status code {response.status_code}")

        return response.json()
