import logging
 
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config import get_settings
from utils.logging import configure_logging

# Routers
from routers.ai_route import router as ai_router
from routers.generate_route import router as generate_router
from routers.wizard_route import router as wizard_router

settings = get_settings()

# Logging Configuration
configure_logging(settings.log_level)
logger = logging.getLogger("content_genie")
 
# Lifespan Events (Startup/Shutdown)
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting up Content Genie API...")
    yield
    logger.info("Shutting down Content Genie API...")
 
 
# FastAPI App Setup
app = FastAPI(
    title=settings.app_name,
    description="Conversational intake wizard that turns a few answers into bios, project summaries and learning reflections.",
    version="1.0.0",
    lifespan=lifespan,
    docs_url=settings.docs_url,
    redoc_url=settings.redoc_url,
)

# Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)
 
# Routers
app.include_router(wizard_router, prefix=settings.api_prefix, tags=["Wizard"])

app.include_router(ai_router, prefix=settings.api_prefix, tags=["AI"])

app.include_router(generate_router, prefix=settings.api_prefix, tags=["Generation"])

# Health & Root Endpoints
@app.get("/health", tags=["System"], summary="Health Check")
async def health_check():
    """Check if the API is healthy and running."""
    logger.info("Health check requested")
    return {"status": "ok"}
 
@app.get("/", tags=["Root"], summary="API Root")
async def root():
    """Welcome message and basic info."""
    return {"message": "Welcome to Content Genie API"}
