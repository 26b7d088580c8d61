from __future__ import annotations
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .settings import settings

logger = logging.getLogger(__name__)

MODELS_HINT = "Call GET /api/models to see which models this key can use, then set GEMINI_MODEL."


class CommentServiceException(Exception):
	"""Base exception for comment generation errors"""
	def __init__(self, message: str):
		self.message = message
		super().__init__(self.message)


class InputError(CommentServiceException):
	"""Request rejected before any upstream call"""
	pass


class ConfigError(CommentServiceException):
	"""Deployment is missing required configuration"""
	pass


class UpstreamError(CommentServiceException):
	"""Gemini answered with a non-2xx status"""
	def __init__(
		self,
		status_code: int,
		data: Any,
		*,
		model: Optional[str] = None,
		hint: Optional[str] = None,
	):
		self.status_code = status_code
		self.data = data
		self.model = model
		self.hint = hint
		super().__init__("Gemini error")


class InternalError(CommentServiceException):
	pass


def redact(text: str, secret: Optional[str] = None) -> str:
	secret = secret if secret is not None else settings.gemini_api_key
	if secret:
		return text.replace(secret, "***")
	return text


async def input_error_handler(request: Request, exc: InputError):
	logger.info(f"Rejected request: {exc.message}")
	return JSONResponse({"error": exc.message}, status_code=status.HTTP_400_BAD_REQUEST)


async def config_error_handler(request: Request, exc: ConfigError):
	logger.error(f"Configuration error: {exc.message}")
	return JSONResponse({"error": exc.message}, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


async def upstream_error_handler(request: Request, exc: UpstreamError):
	logger.warning(f"Gemini error {exc.status_code} from model {exc.model}")
	body: Dict[str, Any] = {"error": exc.message, "status": exc.status_code, "data": exc.data}
	if exc.model:
		body["model"] = exc.model
	if exc.hint:
		body["hint"] = exc.hint
	return JSONResponse(body, status_code=exc.status_code)


async def internal_error_handler(request: Request, exc: Exception):
	message = redact((exc.message if isinstance(exc, CommentServiceException) else str(exc)) or exc.__class__.__name__)
	cause = exc.__cause__.__class__.__name__ if exc.__cause__ is not None else exc.__class__.__name__
	# No traceback: chained httpx errors can carry the query-string key
	logger.error(f"Unexpected failure while handling {request.url.path}: {cause}: {message}")
	return JSONResponse(
		{"error": "Server error", "detail": message},
		status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
	)


async def not_found_handler(request: Request, exc: StarletteHTTPException):
	return PlainTextResponse("Not Found", status_code=status.HTTP_404_NOT_FOUND)


async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
	headers = exc.headers or {}
	allowed = sorted(m.strip() for m in headers.get("Allow", "").split(",") if m.strip() and m.strip() != "HEAD")
	text = f"Use {' or '.join(allowed)}" if allowed else "Method Not Allowed"
	return PlainTextResponse(text, status_code=status.HTTP_405_METHOD_NOT_ALLOWED, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
	app.add_exception_handler(InputError, input_error_handler)
	app.add_exception_handler(ConfigError, config_error_handler)
	app.add_exception_handler(UpstreamError, upstream_error_handler)
	app.add_exception_handler(InternalError, internal_error_handler)
	app.add_exception_handler(status.HTTP_404_NOT_FOUND, not_found_handler)
	app.add_exception_handler(status.HTTP_405_METHOD_NOT_ALLOWED, method_not_allowed_handler)
