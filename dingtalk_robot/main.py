from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from dingtalk_robot.api.messages import router as messages_router
from dingtalk_robot.config import settings
from dingtalk_robot.dingtalk.client import dingtalk_client
from dingtalk_robot.errors import DingTalkError
from dingtalk_robot.middleware.error_handler import (
    dingtalk_exception_handler,
    global_exception_handler,
)
from dingtalk_robot.middleware.logging import LoggingMiddleware


logger = structlog.get_logger()


def configure_logging():
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            (
                structlog.dev.ConsoleRenderer()
                if settings.APP_ENV == "development"
                else structlog.processors.JSONRenderer()
            ),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    logger.info("app.startup", env=settings.APP_ENV)

    # Bad credentials config fails startup, not the first send
    if settings.DINGTALK_ENABLED:
        await dingtalk_client.initialize()

    yield

    if settings.DINGTALK_ENABLED:
        await dingtalk_client.shutdown()
    logger.info("app.shutdown")


app = FastAPI(title="DingTalk Robot Relay", lifespan=lifespan)

# Middleware
app.add_middleware(LoggingMiddleware)

# Exception handlers
app.add_exception_handler(DingTalkError, dingtalk_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

# Routes
app.include_router(messages_router)


@app.get("/health")
async def health():
    return {"status": "ok"}
