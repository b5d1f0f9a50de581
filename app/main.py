"""Main FastAPI application"""
from fastapi import FastAPI
from app.config import get_settings
from app.middleware.cors import setup_cors
from app.middleware.error_handler import ErrorHandlerMiddleware
from contextlib import asynccontextmanager
import logging

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


def check_notion_settings():
    """Warn when the Notion credentials are missing; requests are still served"""
    settings = get_settings()
    if not settings.notion_configured:
        logger.warning("Notion API key or database ID is not set; submissions will fail until they are configured")
    return settings.notion_configured


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    # Startup
    settings = get_settings()
    logger.info(f"Registration API starting on port {settings.port} ({settings.environment})")
    check_notion_settings()
    yield


# Create FastAPI app with lifespan
app = FastAPI(
    title="Registration Notion Bridge",
    description="Forwards registration form submissions into a Notion database",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# Setup CORS
setup_cors(app)

# Add error handling middleware
app.add_middleware(ErrorHandlerMiddleware)

# Health check endpoint
@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "registration-notion-bridge",
        "notion_configured": get_settings().notion_configured
    }

@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Registration Notion Bridge API",
        "version": "1.0.0",
        "docs": "/docs"
    }

# Import and include routers
from app.routers import submissions

app.include_router(submissions.router, prefix="/api", tags=["Submissions"])

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=get_settings().port)
