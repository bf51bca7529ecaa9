# app/main.py

import logging
from datetime import datetime, timezone
from typing import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import settings
from app.core.database import Database
from app.core.exceptions import AppError, app_error_handler
from app.services.storage_service import CloudinaryImageStorage

from app.domains.usr.routers import router as usr_router
from app.domains.vet.routers import router as vet_router
from app.domains.rpt.routers import router as rpt_router

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG_MODE else settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Muitas requisições de uma vez. Tente novamente mais tarde."

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Permitted-Cross-Domain-Policies": "none",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
}


# -- Ciclo de vida da aplicação --
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: cria o `Database` e o cliente de imagens em `app.state`.
    Shutdown: libera o pool de conexões.
    """
    logger.info("Iniciando %s (%s)", settings.APP_NAME, settings.APP_ENV)
    database = Database.from_settings(settings)
    if settings.DB_CREATE_TABLES:
        await database.create_all()
    app.state.database = database
    app.state.image_storage = CloudinaryImageStorage.from_settings(settings)

    yield

    logger.info("Encerrando %s", settings.APP_NAME)
    await database.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


# -- Limite de requisições por endereço do cliente --
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.RATE_LIMIT],
    enabled=settings.RATE_LIMIT_ENABLED,
)
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)

# -- CORS --
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# -- Cabeçalhos de segurança --
@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    response = await call_next(request)
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response


# -- Handlers de erro: todo erro sai como {"error": "..."} --
app.add_exception_handler(AppError, app_error_handler)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    details = []
    for error in exc.errors():
        # loc = ("body", "birthDate") -> "birthDate"
        field = ".".join(str(part) for part in error["loc"] if part not in ("body", "query", "path"))
        details.append({"field": field, "message": error["msg"].removeprefix("Value error, ")})
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Dados inválidos", "details": details},
    )


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    if exc.status_code == status.HTTP_404_NOT_FOUND and message == "Not Found":
        message = "Rota não encontrada"
    return JSONResponse(status_code=exc.status_code, content={"error": message}, headers=exc.headers)


@app.exception_handler(RateLimitExceeded)
async def handle_rate_limit(request: Request, exc: RateLimitExceeded):
    logger.warning("Limite de requisições excedido para %s", get_remote_address(request))
    return JSONResponse(status_code=status.HTTP_429_TOO_MANY_REQUESTS, content={"error": RATE_LIMIT_MESSAGE})


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception("Erro inesperado em %s %s", request.method, request.url.path)
    # Respondido pelo ServerErrorMiddleware, fora de add_security_headers.
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": str(exc)},
        headers=SECURITY_HEADERS,
    )


# -- Routers dos domínios --
app.include_router(usr_router)
app.include_router(vet_router)
app.include_router(rpt_router)


# -- Health check --
@app.get("/health", tags=["Health"], summary="Health Check")
async def health_check():
    return {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.PORT)
