"""
Unit tests for the Gemini generateContent call (no network).
"""

import json

import httpx
import pytest

from conftest import gemini_envelope, gemini_http
from gemini_client import GeminiError, build_generate_url, extract_text, query_gemini


def test_generate_url_uses_base_and_model(settings) -> None:
    assert build_generate_url(settings) == (
        "https://generativelanguage.googleapis.com/v1beta/models/gemini-2.0-flash:generateContent"
    )


def test_returns_first_candidate_text(settings) -> None:
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=gemini_envelope("## 🏆 Open\n- A def. B: 6-4"))

    text = query_gemini("prompt text", settings, client=gemini_http(handler))

    assert text == "## 🏆 Open\n- A def. B: 6-4"
    assert len(seen) == 1
    request = seen[0]
    assert request.method == "POST"
    assert request.url.path.endswith("/models/gemini-2.0-flash:generateContent")
    assert request.url.params["key"] == settings.gemini_api_key
    assert json.loads(request.content) == {
        "contents": [{"parts": [{"text": "prompt text"}]}],
        "tools": [{"google_search": {}}],
    }


def test_non_2xx_status_raises_with_status(settings) -> None:
    client = gemini_http(lambda request: httpx.Response(500, text="boom"))
    with pytest.raises(GeminiError) as exc_info:
        query_gemini("p", settings, client=client)
    assert "500" in str(exc_info.value)


def test_missing_candidates_raises_no_response(settings) -> None:
    client = gemini_http(lambda request: httpx.Response(200, json={"candidates": []}))
    with pytest.raises(GeminiError, match="No response from Gemini"):
        query_gemini("p", settings, client=client)


def test_empty_text_raises_no_text_content(settings) -> None:
    client = gemini_http(lambda request: httpx.Response(200, json=gemini_envelope("")))
    with pytest.raises(GeminiError, match="No text content"):
        query_gemini("p", settings, client=client)


def test_extract_text_without_parts() -> None:
    with pytest.raises(GeminiError, match="No text content"):
        extract_text({"candidates": [{"content": {}, "finishReason": "SAFETY"}]})


def test_api_key_never_printed(settings, capsys) -> None:
    client = gemini_http(lambda request: httpx.Response(403, text=f"bad key {settings.gemini_api_key}"))
    with pytest.raises(GeminiError):
        query_gemini("p", settings, client=client)
    out = capsys.readouterr().out
    assert settings.gemini_api_key not in out
    assert "***API_KEY***" in out


def test_transport_error_is_masked(settings) -> None:
    def handler(request):
        raise httpx.ConnectError(f"could not connect to {request.url}", request=request)

    with pytest.raises(GeminiError) as exc_info:
        query_gemini("p", settings, client=gemini_http(handler))
    assert settings.gemini_api_key not in str(exc_info.value)
    assert "Gemini request failed" in str(exc_info.value)


def test_missing_key_is_rejected(settings) -> None:
    no_key = settings.model_copy(update={"gemini_api_key": None})
    with pytest.raises(GeminiError, match="GEMINI_API_KEY"):
        query_gemini("p", no_key, client=gemini_http(lambda request: httpx.Response(200)))
