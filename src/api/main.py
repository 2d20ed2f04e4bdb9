import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from src.api.observability import setup_observability
from src.api.routers.catalog import router as catalog_router
from src.api.routers.discount_requests import router as discount_requests_router
from src.api.routers.governance import router as governance_router
from src.api.routers.service_registry import store_backend_name


@asynccontextmanager
async def _app_lifespan(_app: FastAPI):
    store_backend_name()
    yield


app = FastAPI(
    title="MarginIQ Governance API",
    version="0.1.0",
    description=(
        "Multi-tenant discount governance service.\n\n"
        "Every request is scoped to the caller company supplied by the gateway in "
        "`X-Company-Id`. Resources owned by other companies are reported as not found."
    ),
    openapi_tags=[
        {
            "name": "Catalog",
            "description": "Tenant-scoped product and customer queries.",
        },
        {
            "name": "AI Governance",
            "description": "Company AI governance settings, presets, and audit trail.",
        },
        {
            "name": "Discount Requests",
            "description": "Auto-approval evaluation of discount requests.",
        },
    ],
    lifespan=_app_lifespan,
)

logger = logging.getLogger(__name__)

setup_observability(app)
app.include_router(catalog_router)
app.include_router(governance_router)
app.include_router(discount_requests_router)


@app.exception_handler(Exception)
async def unhandled_exception_to_problem_details(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled exception while serving request",
        exc_info=exc,
        extra={
            "extra_fields": {
                "endpoint": request.url.path,
                "company_id": request.headers.get("X-Company-Id"),
                "user_id": request.headers.get("X-User-Id"),
                "correlation_id": request.headers.get("X-Correlation-Id"),
            }
        },
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        media_type="application/problem+json",
        content={
            "type": "about:blank",
            "title": "Internal Server Error",
            "status": 500,
            "detail": "An unexpected error occurred.",
            "instance": str(request.url.path),
        },
    )


@app.get("/health", tags=["Health"])
@app.get("/api/v1/health", include_in_schema=False)
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/health/live", tags=["Health"])
@app.get("/api/v1/health/live", include_in_schema=False)
def health_live() -> dict[str, str]:
    return {"status": "live"}


@app.get("/health/ready", tags=["Health"])
@app.get("/api/v1/health/ready", include_in_schema=False)
def health_ready() -> dict[str, str]:
    store_backend_name()
    return {"status": "ready"}
