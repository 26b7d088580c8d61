from __future__ import annotations

from fastapi import APIRouter, Depends

from ..exceptions import CommentServiceException, InternalError, redact
from ..gemini_client import GeminiClient
from ..models import ModelListResponse
from ..settings import Settings, get_settings

router = APIRouter(prefix="/api", tags=["models"])

MODEL_NOTE = (
	"Pick one model name like models/gemini-2.5-flash and set GEMINI_MODEL "
	"to the part after 'models/'."
)


@router.get("/models", response_model=ModelListResponse)
async def list_models(config: Settings = Depends(get_settings)):
	client = None
	try:
		client = GeminiClient(config=config)
		names = await client.list_models()
	except CommentServiceException:
		raise
	except Exception as e:
		raise InternalError(redact(str(e) or e.__class__.__name__, config.gemini_api_key)) from e
	finally:
		if client is not None:
			await client.aclose()
	return ModelListResponse(models=names, note=MODEL_NOTE)

