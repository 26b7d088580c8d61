"""Builders shared by the test modules."""

from __future__ import annotations

from typing import Any

from report_comments.settings import Settings

TEST_KEY = "test-secret-key"
BASE_URL = "https://gemini.test"


def make_settings(**overrides: Any) -> Settings:
    values: dict[str, Any] = {
        "gemini_api_key": TEST_KEY,
        "gemini_model": None,
        "gemini_fallback_models": "gemini-a,gemini-b,gemini-c",
        "gemini_base_url": BASE_URL,
        "gemini_api_version": "v1",
        "gemini_models_api_version": "v1beta",
        "gemini_auth_mode": "query",
        "gemini_backoff_base_ms": 0,
        "gemini_max_retries": 3,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def gemini_reply(*texts: str) -> dict[str, Any]:
    return {
        "candidates": [
            {"content": {"parts": [{"text": t} for t in texts], "role": "model"}}
        ]
    }


def generate_path(model: str) -> str:
    return f"/v1/models/{model}:generateContent"
