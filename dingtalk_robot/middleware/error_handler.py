import structlog
from fastapi import Request
from fastapi.responses import JSONResponse

from dingtalk_robot.errors import DingTalkError, ProtocolError

logger = structlog.get_logger()


async def dingtalk_exception_handler(request: Request, exc: DingTalkError) -> JSONResponse:
    logger.warning("dingtalk_error", path=request.url.path, error=str(exc))
    content = {"error": type(exc).__name__, "detail": str(exc)}
    if isinstance(exc, ProtocolError):
        content["status_code"] = exc.status_code
    return JSONResponse(status_code=502, content=content)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_exception", path=request.url.path, method=request.method)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "detail": str(exc)},
    )
