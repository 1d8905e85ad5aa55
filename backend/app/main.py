from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from app.core.config import get_settings
from app.core.logging import get_logger
from app.routers import book_chat, quiz


settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: providers are created lazily on first request
    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY is not set; quiz and chat requests will fail")
    yield
    # Shutdown: cleanup if needed


app = FastAPI(
    title="Story Reader API",
    description="Story-grounded quiz generation and reading help for young readers",
    version="1.0.0",
    lifespan=lifespan,
)
# Avoid 307 redirects for trailing slash (e.g. /api/quiz/ -> /api/quiz) that can cause redirect loops behind nginx
app.router.redirect_slashes = False

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        settings.frontend_url,
        "http://localhost:5173",
        "http://localhost",
        "http://127.0.0.1",
        "http://0.0.0.0",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(quiz.router, prefix="/api/quiz", tags=["Quiz"])
app.include_router(book_chat.router, prefix="/api/book-chat", tags=["Book Chat"])


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
