"""
Stockroom FastAPI Main Application
Entry point for the inventory tracking REST API
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from stockroom.core.config import settings
from stockroom.core.database import check_db_connection, init_db
from stockroom.core.exceptions import StockroomException, UnauthorizedError
from stockroom.core.logging import setup_logging
from stockroom.api.api_router import api_router

setup_logging()

logger = logging.getLogger("stockroom.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application startup and shutdown tasks
    """
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    init_db()
    logger.info("Application startup completed successfully")
    yield
    logger.info("Shutting down application")


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="""
    ## Stockroom Inventory API

    Categories, items, stock movements and user accounts.

    ### Key Features:
    - **Items**: on-hand quantities with reorder thresholds and CSV export
    - **Stock Movements**: append-only in/out ledger, atomic quantity posting
    - **Reorder List**: items at or below their minimum with suggested order size
    - **Accounts**: bearer-token login, admin and staff roles
    """,
    docs_url=settings.DOCS_URL,
    redoc_url=settings.REDOC_URL,
    openapi_url=settings.OPENAPI_URL,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StockroomException)
async def stockroom_exception_handler(request: Request, exc: StockroomException):
    """Render application errors as {"error", "code"}"""
    content = {"error": exc.message, "code": exc.code}
    field_errors = getattr(exc, "field_errors", None)
    if field_errors:
        content["fieldErrors"] = field_errors

    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
    return JSONResponse(status_code=exc.status_code, content=content, headers=headers)


# Codes for errors raised by routing and the framework itself
HTTP_ERROR_CODES = {
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    503: "SERVICE_UNAVAILABLE",
}


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Unknown routes, wrong methods and framework errors use the same body"""
    fallback = "SERVER_ERROR" if exc.status_code >= 500 else "HTTP_ERROR"
    code = HTTP_ERROR_CODES.get(exc.status_code, fallback)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail), "code": code},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed or missing input is a 400 with per-field messages"""
    field_errors = {}
    for error in exc.errors():
        location = [str(part) for part in error["loc"] if part not in ("body", "query", "path")]
        field = ".".join(location) or "request"
        field_errors.setdefault(field, []).append(error["msg"])

    message = "; ".join(
        f"{field}: {msg}" for field, messages in field_errors.items() for msg in messages
    )
    return JSONResponse(
        status_code=400,
        content={"error": message, "code": "VALIDATION_ERROR", "fieldErrors": field_errors},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler for unhandled errors
    """
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={
            "error": str(exc) if settings.DEBUG else "Internal server error",
            "code": "SERVER_ERROR",
        }
    )


@app.get("/health", tags=["System"])
def health_check():
    """
    Health check endpoint for monitoring and load balancers
    """
    try:
        db_status = check_db_connection()

        return {
            "status": "healthy" if db_status else "degraded",
            "version": settings.APP_VERSION,
            "database": "connected" if db_status else "disconnected",
        }
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        raise HTTPException(status_code=503, detail="Service unavailable")


app.include_router(api_router, prefix=settings.API_PREFIX)


def run():
    """Console entry point: serve the API with uvicorn"""
    import uvicorn

    uvicorn.run(
        "stockroom.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )


if __name__ == "__main__":
    run()
