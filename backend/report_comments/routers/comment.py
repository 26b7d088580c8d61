from __future__ import annotations
import logging

from fastapi import APIRouter, Depends, Request

from ..comments import build_prompt, strip_digits
from ..exceptions import MODELS_HINT, CommentServiceException, InputError, InternalError, UpstreamError, redact
from ..gemini_client import GeminiClient
from ..models import AllCandidatesFailed, CommentRequest, CommentResponse
from ..settings import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["comment"])


@router.post("/comment", response_model=CommentResponse)
async def generate_comment(request: Request, config: Settings = Depends(get_settings)):
	if "application/json" not in request.headers.get("content-type", ""):
		raise InputError("Expected application/json")
	client = None
	try:
		req = CommentRequest.from_payload(await request.json())
		client = GeminiClient(config=config)
		result = await client.generate(build_prompt(req))
	except CommentServiceException:
		raise
	except Exception as e:
		raise InternalError(redact(str(e) or e.__class__.__name__, config.gemini_api_key)) from e
	finally:
		if client is not None:
			await client.aclose()

	if isinstance(result, AllCandidatesFailed):
		failure = result.last_error
		raise UpstreamError(failure.status_code, failure.data, model=failure.model, hint=MODELS_HINT)
	logger.info(f"Comment generated by {result.model}")
	return CommentResponse(comment=strip_digits(result.text), model=result.model)

