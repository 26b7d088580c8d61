from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_FALLBACK_MODELS = "gemini-2.5-flash,gemini-2.0-flash,gemini-1.5-flash"


class Settings(BaseSettings):
	gemini_api_key: str | None = Field(default=None, validation_alias="GEMINI_API_KEY")
	# Preferred model, tried before the fallbacks when set
	gemini_model: str | None = Field(default=None, validation_alias="GEMINI_MODEL")
	# Comma-separated list tried in order after the preferred model
	gemini_fallback_models: str = Field(default=DEFAULT_FALLBACK_MODELS, validation_alias="GEMINI_FALLBACK_MODELS")
	gemini_base_url: str = Field(default="https://generativelanguage.googleapis.com", validation_alias="GEMINI_BASE_URL")
	gemini_api_version: str = Field(default="v1", validation_alias="GEMINI_API_VERSION")
	# Model listing is only complete on the beta surface
	gemini_models_api_version: str = Field(default="v1beta", validation_alias="GEMINI_MODELS_API_VERSION")
	# "query" sends ?key=..., "header" sends x-goog-api-key
	gemini_auth_mode: str = Field(default="query", validation_alias="GEMINI_AUTH_MODE")
	gemini_timeout_seconds: float = Field(default=30.0, validation_alias="GEMINI_TIMEOUT_SECONDS")

	# Rate-limit backoff
	gemini_max_retries: int = Field(default=3, validation_alias="GEMINI_MAX_RETRIES")
	gemini_backoff_base_ms: int = Field(default=1000, validation_alias="GEMINI_BACKOFF_BASE_MS")

	log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

	# pydantic-settings v2 style config
	model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

	def candidate_models(self) -> List[str]:
		"""Preferred model first, then fallbacks, without duplicates."""
		ordered: List[str] = []
		head = (self.gemini_model or "").strip()
		if head:
			ordered.append(head)
		for name in self.gemini_fallback_models.split(","):
			name = name.strip()
			if name and name not in ordered:
				ordered.append(name)
		return ordered


settings = Settings()


def get_settings() -> Settings:
	return settings
