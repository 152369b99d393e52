"""
FastAPI application entry point.
Lifespan manages the pooled upstream HTTP client.

Run with:
    uvicorn ecobot.main:app --port 3001
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from ecobot.config import settings
from ecobot.http import init_http, close_http
from ecobot.middleware import RequestLoggingMiddleware
from ecobot.routers import chat

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    init_http()
    if not settings.anthropic_api_key:
        logging.getLogger("ecobot-api").warning("ANTHROPIC_API_KEY not configured, chat requests will fail")
    yield
    # Shutdown
    await close_http()


app = FastAPI(
    title="EcoBot API",
    description="Environmental science chatbot with live air quality and illustrative images",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Custom middleware
app.add_middleware(RequestLoggingMiddleware)

# Routers
app.include_router(chat.router, prefix="/api", tags=["Chat"])


@app.get("/health", tags=["Health"])
async def health():
    return {"status": "ok"}


# Global error handlers: the client reads `error`, not FastAPI's `detail`
@app.exception_handler(HTTPException)
async def http_error_handler(request: Request, exc: HTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": chat.QUERY_REQUIRED})
