import logging

from fastapi import Depends, FastAPI

from .exceptions import register_exception_handlers
from .settings import Settings, get_settings, settings
from .routers import comment, discovery

logging.basicConfig(
	level=getattr(logging, settings.log_level.upper(), logging.INFO),
	format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
# httpx logs full request URLs, which carry the API key in query auth mode
logging.getLogger("httpx").setLevel(logging.WARNING)

app = FastAPI(title="Report Comment API")
register_exception_handlers(app)
app.include_router(comment.router)
app.include_router(discovery.router)


@app.get("/info")
def root(config: Settings = Depends(get_settings)):
	return {"status": "ok", "gemini_configured": bool(config.gemini_api_key)}
