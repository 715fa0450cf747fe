import logging
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, Response
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from quiz_relay.core.config import Settings, get_settings
from quiz_relay.schemas.submission import Submission
from quiz_relay.services.report import build_group_report, build_private_report
from quiz_relay.services.telegram import TelegramClient

logger = logging.getLogger(__name__)

router = APIRouter(tags=["submit"])

CORS_HEADERS = {
    "Access-Control-Allow-Credentials": "true",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,OPTIONS,PATCH,DELETE,POST,PUT",
    "Access-Control-Allow-Headers": (
        "X-CSRF-Token, X-Requested-With, Accept, Accept-Version, Content-Length, "
        "Content-MD5, Content-Type, Date, X-Api-Version"
    ),
}

SUBMIT_PATH = "/api/submit"
FAILED = "Failed to submit results"

def get_telegram_client(settings: Settings = Depends(get_settings)) -> TelegramClient:
    return TelegramClient(
        bot_token=settings.bot_token or "",
        api_base=settings.telegram_api_base,
        timeout=settings.telegram_timeout,
        limit=settings.message_limit,
        delay=settings.chunk_delay,
    )

async def handle_submission(
    method: str, body: bytes, settings: Settings, client: TelegramClient
) -> tuple[int, dict | None]:
    """Relay one quiz submission and return ``(status_code, json_body)``."""
    method = method.upper()
    if method == "OPTIONS":
        return 200, None
    if method != "POST":
        return 405, {"error": "Method not allowed"}

    missing = settings.missing_credentials()
    if missing:
        logger.error("Server configuration error: %s not set", ", ".join(missing))
        return 500, {"error": "Server configuration error: Missing Telegram credentials"}

    try:
        submission = Submission.model_validate_json(body or b"")
    except ValidationError as e:
        logger.warning("Rejected submission payload: %d validation error(s)", e.error_count())
        return 400, {"success": False, "error": "Invalid submission payload"}

    try:
        tz = ZoneInfo(settings.report_timezone)
        private = await client.send(settings.private_chat_id, build_private_report(submission, tz))
        result = private
        if private.success:
            result = await client.send(settings.group_chat_id, build_group_report(submission))
    except Exception:
        logger.exception("Unexpected error relaying results for %s", submission.student_name)
        return 500, {"success": False, "error": FAILED}

    if not result.success:
        logger.error("Relay failed at %s: %s", result.destination, result.detail)
        error = f"{FAILED}: {result.detail}" if result.detail else FAILED
        return 500, {"success": False, "error": error}

    logger.info("Results for %s relayed (score %s%%)", submission.student_name, submission.score)
    return 200, {"success": True, "message": "Results submitted successfully"}

@router.api_route(SUBMIT_PATH, methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"])
async def submit(
    request: Request,
    settings: Settings = Depends(get_settings),
    client: TelegramClient = Depends(get_telegram_client),
):
    body = await request.body()
    status, payload = await handle_submission(request.method, body, settings, client)
    if payload is None:
        return Response(status_code=status, headers=CORS_HEADERS)
    return JSONResponse(payload, status_code=status, headers=CORS_HEADERS)

async def submit_http_exception_handler(request: Request, exc: StarletteHTTPException):
    # verbs outside the route's list are rejected by the router before submit() runs
    if exc.status_code == 405 and request.url.path == SUBMIT_PATH:
        return JSONResponse({"error": "Method not allowed"}, status_code=405, headers=CORS_HEADERS)
    return await http_exception_handler(request, exc)
