from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from quiz_relay.core.config import get_settings
from quiz_relay.core.logging_config import configure_logging
from quiz_relay.api.submit import router as submit_router, submit_http_exception_handler

def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Quiz Report Relay")
    app.include_router(submit_router)
    app.add_exception_handler(StarletteHTTPException, submit_http_exception_handler)

    @app.get("/health")
    def health():
        return {"ok": True}

    return app

app = create_app()

def run() -> None:
    settings = get_settings()
    uvicorn.run("quiz_relay.main:app", host=settings.host, port=settings.port)
