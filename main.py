import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config.logging_config import configure_logging
from config.settings import Settings, load_settings
from routers.contacts_router import router as contacts_router
from routers.deals_router import router as deals_router
from routers.health_router import router as health_router
from routers.insight_router import router as insight_router
from services.errors import GatewayError
from services.hubspot_client import HubSpotClient, build_http_client
from services.insight_service import build_insight_model

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, details=None, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "details": jsonable_encoder(details)},
        headers=headers,
    )


async def gateway_error_handler(request: Request, exc: GatewayError):
    logger.error("%s %s: %s", request.method, request.url.path, exc.message)
    return error_response(exc.status_code, exc.message, exc.details)


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail), None, headers=exc.headers)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.info("%s %s: invalid request body", request.method, request.url.path)
    return error_response(400, "Invalid request body", exc.errors())


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("%s %s: unhandled error", request.method, request.url.path)
    return error_response(500, str(exc) or "Internal Server Error")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Missing credentials raise here, before uvicorn accepts connections.
        resolved = settings or load_settings()
        configure_logging(resolved.log_level)

        async with build_http_client(resolved) as http:
            app.state.settings = resolved
            app.state.crm = HubSpotClient(http)
            insight_model = build_insight_model(resolved)
            app.state.insight_model = insight_model
            logger.info(
                "Gateway ready: CRM %s, insight provider %s (%s)",
                resolved.hubspot_api_base,
                resolved.insight_provider,
                resolved.model_name,
            )
            try:
                yield
            finally:
                await insight_model.aclose()
        logger.info("Gateway stopped")

    app = FastAPI(title="HubSpot Insight Gateway", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"]
    )

    app.add_exception_handler(GatewayError, gateway_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(health_router)
    app.include_router(contacts_router)
    app.include_router(deals_router)
    app.include_router(insight_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=load_settings().port)
