#!/usr/bin/env python3
"""
Black Box Verification Script for a running summarizer deployment.

Sends a sample transcript to /api/summarize, then emails the summary through
/api/send-email and prints the message id and preview URL (ethereal only).

Usage:
    python scripts/verify_deployment_http.py <BASE_URL> [RECIPIENT]

Example:
    python scripts/verify_deployment_http.py http://localhost:4000 you@acme.io
"""
import asyncio
import sys
import time
from datetime import datetime

import httpx
import markdown

SAMPLE_TRANSCRIPT = (
    "Alice: Thanks for joining. We need to decide on the release date.\n"
    "Bob: QA signed off yesterday, so Friday works.\n"
    "Alice: Great, we decided to ship Friday. I'll own the release notes.\n"
    "Bob: I'll update the status page by Thursday."
)
DEFAULT_RECIPIENT = "qa@summarizer.dev"


def log(message: str):
    """Log with timestamp."""
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    print(f"[{timestamp}] {message}")


async def main():
    if len(sys.argv) < 2:
        print("Usage: python scripts/verify_deployment_http.py <BASE_URL> [RECIPIENT]")
        print("Example: python scripts/verify_deployment_http.py http://localhost:4000 you@acme.io")
        sys.exit(1)

    base_url = sys.argv[1].rstrip("/")
    recipient = sys.argv[2] if len(sys.argv) > 2 else DEFAULT_RECIPIENT

    log("=" * 60)
    log("BLACK BOX VERIFICATION - Meeting Notes Summarizer")
    log("=" * 60)
    log(f"Target URL: {base_url}")

    # LLM calls on long transcripts can take a while
    async with httpx.AsyncClient(base_url=base_url, timeout=120.0) as client:
        # Step 1: Summarize
        log("\n--- Step 1: POST /api/summarize ---")
        start_time = time.time()
        try:
            response = await client.post("/api/summarize", json={"transcript": SAMPLE_TRANSCRIPT})
        except httpx.RequestError as e:
            log(f"ERROR: Request failed - {e}")
            sys.exit(1)

        log(f"Response Status: {response.status_code}")
        log(f"Response Time: {time.time() - start_time:.2f}s")
        if response.status_code != 200:
            log(f"ERROR: {response.json().get('error', response.text[:500])}")
            sys.exit(1)

        summary = response.json().get("summary", "")
        log(f"Summary length: {len(summary)} chars")
        if "Decisions" not in summary:
            log("WARNING: Summary has no Decisions section")

        # Step 2: Email
        log("\n--- Step 2: POST /api/send-email ---")
        try:
            response = await client.post("/api/send-email", json={
                "recipients": [recipient],
                "subject": "Deployment verification",
                "html": markdown.markdown(summary or "(empty summary)"),
            })
        except httpx.RequestError as e:
            log(f"ERROR: Request failed - {e}")
            sys.exit(1)

        log(f"Response Status: {response.status_code}")
        if response.status_code != 200:
            log(f"ERROR: {response.json().get('error', response.text[:500])}")
            sys.exit(1)

        receipt = response.json()
        log(f"Message ID: {receipt.get('messageId')}")
        log(f"Preview URL: {receipt.get('previewUrl') or 'n/a'}")

    log("\n" + "=" * 60)
    log("VERIFICATION PASSED")
    log("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
