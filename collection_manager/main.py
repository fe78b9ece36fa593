from fastapi import FastAPI, Request
import os
import logging
from dotenv import load_dotenv

from .api.collections import router as collections_router
from .storage.factory import create_default_collection_service
from .storage.registry import ProviderConfigurationError

# Load environment variables
load_dotenv()

# Set up logging
logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Configure root logging from LOG_LEVEL; a no-op if handlers already exist."""
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

# Create FastAPI application
app = FastAPI(
    title="Collection Manager",
    description="Create, rename, delete and activate named collections",
    version="1.0.0"
)

# Initialize collection service on startup
@app.on_event("startup")
async def startup_event():
    """Configure logging, initialize collection service and attach to application state."""
    configure_logging()
    if getattr(app.state, "collection_service", None) is not None:
        return
    try:
        collection_service = create_default_collection_service()
        app.state.collection_service = collection_service
        logger.info("Collection service initialized successfully")
    except ProviderConfigurationError as e:
        logger.error(f"Failed to initialize collection service: {e}")
        raise RuntimeError(f"Collection service initialization failed: {e}") from e

# Include API routers
app.include_router(collections_router)

@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring and deployment validation"""
    return {
        "status": "healthy",
        "service": "collection-manager",
        "version": "1.0.0"
    }

@app.get("/debug/provider", include_in_schema=False, tags=["Debug"])
async def provider_info(request: Request):
    """
    Get the provider the collection service is bound to.

    **Development and Testing Purpose Only**
    """
    collection_service = request.app.state.collection_service
    return {
        "provider": collection_service.provider.provider_name,
        "listeners": {
            "collection_added": len(collection_service.collection_added),
            "collection_edited": len(collection_service.collection_edited),
            "collection_deleted": len(collection_service.collection_deleted),
            "active_collection_changed": len(collection_service.active_collection_changed)
        }
    }

if __name__ == "__main__":
    import uvicorn
    host = os.getenv("HOST", "127.0.0.1")
    port = int(os.getenv("PORT", "8000"))
    debug = os.getenv("DEBUG", "False").lower() == "true"

    uvicorn.run("collection_manager.main:app", host=host, port=port, reload=debug)
