from __future__ import annotations
import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

import httpx

from .comments import extract_text
from .exceptions import ConfigError, UpstreamError
from .models import AllCandidatesFailed, GenerationResult, GenerationSuccess, UpstreamFailure
from .settings import Settings, settings as default_settings

logger = logging.getLogger(__name__)

RATE_LIMITED = 429
MAX_MODEL_PAGES = 10

Sleep = Callable[[float], Awaitable[Any]]


async def send_with_retry(
	send: Callable[[], Awaitable[httpx.Response]],
	*,
	max_retries: int = 3,
	backoff_base_ms: int = 1000,
	sleep: Sleep = asyncio.sleep,
) -> httpx.Response:
	"""Call ``send`` until it returns something other than 429.

	Waits ``backoff_base_ms * 2**attempt`` between attempts. After
	``max_retries`` retries the last 429 response is returned as-is.
	"""
	attempt = 0
	while True:
		resp = await send()
		if resp.status_code != RATE_LIMITED or attempt >= max_retries:
			return resp
		delay_ms = backoff_base_ms * (2 ** attempt)
		logger.info(f"Rate limited, retrying in {delay_ms}ms (attempt {attempt + 1}/{max_retries})")
		await sleep(delay_ms / 1000)
		attempt += 1


def decode_body(resp: httpx.Response) -> Any:
	try:
		return resp.json()
	except ValueError:
		return {"raw": resp.text}


class GeminiClient:
	def __init__(
		self,
		api_key: Optional[str] = None,
		*,
		config: Optional[Settings] = None,
		http_client: Optional[httpx.AsyncClient] = None,
		sleep: Sleep = asyncio.sleep,
	) -> None:
		self.config = config or default_settings
		self.api_key = api_key or self.config.gemini_api_key
		if not self.api_key:
			raise ConfigError("Missing GEMINI_API_KEY secret")
		self.base_url = self.config.gemini_base_url.rstrip("/")
		self._auth_in_query = self.config.gemini_auth_mode != "header"
		self._sleep = sleep
		self._owns_client = http_client is None
		self._client = http_client or httpx.AsyncClient(timeout=self.config.gemini_timeout_seconds)

	def _auth(self) -> tuple[Dict[str, str], Dict[str, str]]:
		params: Dict[str, str] = {}
		headers: Dict[str, str] = {}
		if self._auth_in_query:
			params["key"] = self.api_key
		else:
			headers["x-goog-api-key"] = self.api_key
		return params, headers

	async def _request(self, method: str, url: str, *, params: Optional[Dict[str, str]] = None, json: Any = None) -> httpx.Response:
		auth_params, headers = self._auth()
		query = {**auth_params, **(params or {})}

		async def send() -> httpx.Response:
			return await self._client.request(method, url, params=query, headers=headers, json=json)

		return await send_with_retry(
			send,
			max_retries=self.config.gemini_max_retries,
			backoff_base_ms=self.config.gemini_backoff_base_ms,
			sleep=self._sleep,
		)

	def generate_url(self, model: str) -> str:
		return f"{self.base_url}/{self.config.gemini_api_version}/models/{model}:generateContent"

	def models_url(self) -> str:
		return f"{self.base_url}/{self.config.gemini_models_api_version}/models"

	async def generate(self, prompt: str, candidates: Optional[List[str]] = None) -> GenerationResult:
		"""Try each candidate model in order and stop at the first 2xx."""
		models = candidates if candidates is not None else self.config.candidate_models()
		if not models:
			raise ConfigError("No Gemini models configured")
		payload: Dict[str, Any] = {"contents": [{"parts": [{"text": prompt}]}]}
		failures: List[UpstreamFailure] = []
		for model in models:
			logger.info(f"Generating comment with model {model}")
			try:
				r = await self._request("POST", self.generate_url(model), json=payload)
			except httpx.TimeoutException:
				logger.warning(f"Model {model} timed out")
				failures.append(UpstreamFailure(model, 504, {"error": "Gemini request timed out"}))
				continue
			except httpx.RequestError as net_err:
				logger.warning(f"Model {model} unreachable: {net_err.__class__.__name__}")
				failures.append(UpstreamFailure(model, 502, {"error": "Gemini request failed"}))
				continue
			data = decode_body(r)
			if r.is_success:
				return GenerationSuccess(model=model, text=extract_text(data))
			logger.warning(f"Model {model} failed with status {r.status_code}")
			failures.append(UpstreamFailure(model, r.status_code, data))
		return AllCandidatesFailed(last_error=failures[-1], attempted=[f.model for f in failures])

	async def list_models(self) -> List[str]:
		names: List[str] = []
		page_token: Optional[str] = None
		for _ in range(MAX_MODEL_PAGES):
			params = {"pageToken": page_token} if page_token else None
			r = await self._request("GET", self.models_url(), params=params)
			data = decode_body(r)
			if not r.is_success:
				raise UpstreamError(r.status_code, data)
			models = data.get("models") if isinstance(data, dict) else None
			for m in models or []:
				name = m.get("name") if isinstance(m, dict) else None
				if name:
					names.append(name)
			page_token = data.get("nextPageToken") if isinstance(data, dict) else None
			if not page_token:
				break
		return names

	async def aclose(self) -> None:
		if self._owns_client:
			await self._client.aclose()
