"""
Gemini API integration for fetching today's tennis scores.

This module sends one generateContent request with Google Search grounding
enabled and returns the first candidate's text. There is no retry: any
failure is fatal to the run.

The API key travels as a query parameter, so the request URL is only ever
printed with the key masked.
"""

import time
from typing import Any, Dict, Optional

import httpx

from schemas import Settings
from utils import mask_secret

GENERATE_URL_TEMPLATE = "{base}/models/{model}:generateContent"

# Search-grounded generation regularly takes longer than httpx's 5s default
REQUEST_TIMEOUT = 120.0


class GeminiError(Exception):
    """The provider call failed or returned no usable text."""
    pass


def build_generate_url(settings: Settings) -> str:
    """Return the generateContent URL, without the key parameter."""
    return GENERATE_URL_TEMPLATE.format(
        base=settings.gemini_base_url.rstrip("/"),
        model=settings.gemini_model,
    )


def build_request_body(prompt: str) -> Dict[str, Any]:
    """Request body with the prompt and the google_search tool enabled."""
    return {
        "contents": [{"parts": [{"text": prompt}]}],
        "tools": [{"google_search": {}}],
    }


def _describe_response(data: Dict[str, Any]) -> Dict[str, Any]:
    """Summarize the response envelope for the run log."""
    candidates = data.get("candidates") or []
    first = candidates[0] if candidates else {}
    content = first.get("content") or {}
    return {
        "has_candidates": bool(candidates),
        "candidates_count": len(candidates),
        "has_content": bool(content),
        "parts_count": len(content.get("parts") or []),
        "finish_reason": first.get("finishReason", "unknown"),
    }


def extract_text(data: Dict[str, Any]) -> str:
    """
    Pull the first candidate's first text part out of a response envelope.

    Args:
        data: Parsed JSON response

    Returns:
        Completion text

    Raises:
        GeminiError: If there is no candidate or the candidate has no text
    """
    candidates = data.get("candidates") or []
    if not candidates or not candidates[0]:
        raise GeminiError("No response from Gemini")

    parts = (candidates[0].get("content") or {}).get("parts") or []
    text = parts[0].get("text") if parts else None
    if not text:
        raise GeminiError("No text content in Gemini response")

    return text


def query_gemini(
    prompt: str,
    settings: Settings,
    client: Optional[httpx.Client] = None,
) -> str:
    """
    Send the prompt to Gemini and return the completion text.

    Args:
        prompt: Instruction prompt
        settings: Process settings (needs gemini_api_key)
        client: Optional httpx client, mainly for tests

    Returns:
        First candidate's text

    Raises:
        GeminiError: On non-2xx status, transport failure or empty response
    """
    api_key = settings.gemini_api_key
    if not api_key:
        raise GeminiError("GEMINI_API_KEY is not configured")

    url = build_generate_url(settings)

    print("   Making request to Gemini API...")
    print(f"   URL: {url}?key=***API_KEY***")

    start = time.monotonic()
    try:
        if client is None:
            with httpx.Client(timeout=REQUEST_TIMEOUT) as own_client:
                response = own_client.post(url, params={"key": api_key}, json=build_request_body(prompt))
        else:
            response = client.post(url, params={"key": api_key}, json=build_request_body(prompt))
    except httpx.HTTPError as e:
        raise GeminiError(f"Gemini request failed: {mask_secret(str(e), api_key)}") from None
    elapsed_ms = int((time.monotonic() - start) * 1000)

    print(f"   Response status: {response.status_code} {response.reason_phrase}")
    print(f"   Response time: {elapsed_ms} ms")

    if not response.is_success:
        print(f"   Error response body: {mask_secret(response.text[:1000], api_key)}")
        raise GeminiError(f"Gemini API error: {response.status_code} {response.reason_phrase}")

    try:
        data = response.json()
    except ValueError:
        raise GeminiError("No response from Gemini: body is not JSON") from None
    if not isinstance(data, dict):
        raise GeminiError("No response from Gemini")

    print(f"   Response structure: {_describe_response(data)}")

    text = extract_text(data)
    print(f"   Got text response, length: {len(text)} characters")

    return text
