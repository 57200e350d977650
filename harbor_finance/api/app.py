"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from harbor_finance.api.deps import engine
from harbor_finance.api.routes import calculations, rates
from harbor_finance.config import settings
from harbor_finance.errors import FinanceError, MethodNotAllowedError, NotFoundError
from harbor_finance.storage.sql import create_tables

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def error_response(request: Request, status_code: int, code: str, message: str) -> JSONResponse:
    request_id = getattr(request.state, "request_id", None) or uuid4().hex
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code, "message": message, "requestId": request_id}},
        headers={REQUEST_ID_HEADER: request_id},
    )


def _validation_message(exc: RequestValidationError) -> str:
    missing = [
        str(err["loc"][-1]) for err in exc.errors()
        if err.get("type") == "missing" and err.get("loc")
    ]
    if missing:
        return f"Missing required fields: {', '.join(missing)}"
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(p) for p in first.get("loc", ())[1:])
    return f"{field}: {first.get('msg', 'Invalid request')}" if field else first.get("msg", "Invalid request")


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.log_level)
    await create_tables(engine)
    yield
    await engine.dispose()


app = FastAPI(
    title="Harbor Finance",
    description="Boat loan calculation, comparison and sharing",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    request.state.request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
    response = await call_next(request)
    response.headers[REQUEST_ID_HEADER] = request.state.request_id
    return response


@app.exception_handler(FinanceError)
async def finance_error_handler(request: Request, exc: FinanceError):
    return error_response(request, exc.status_code, exc.code, exc.message)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return error_response(request, 400, "VALIDATION_ERROR", _validation_message(exc))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return await finance_error_handler(request, NotFoundError("Endpoint not found"))
    if exc.status_code == 405:
        return await finance_error_handler(request, MethodNotAllowedError(request.method))
    return error_response(request, exc.status_code, "CALCULATION_ERROR", str(exc.detail))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
    return error_response(request, 500, "CALCULATION_ERROR", "Failed to process finance request")


app.include_router(calculations.router)
app.include_router(rates.router)


@app.get("/health")
async def health():
    return {"status": "healthy", "service": "finance-service"}
