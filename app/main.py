"""
Emergency Relief DAO

FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import router as dao_api_router
from app.api.error_handlers import register_error_handlers
from app.config import get_settings

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle management."""
    logger.info(
        f"Starting Emergency Relief DAO (owner={settings.initial_owner}, "
        f"quorum={settings.quorum}, voting_period={settings.voting_period_blocks} blocks)"
    )
    yield
    logger.info("Shutting down Emergency Relief DAO")


# Create FastAPI application
app = FastAPI(
    title="Emergency Relief DAO",
    description="""
    Governance ledger for pooled emergency-relief funds.

    ## Workflow

    1. A member submits a claim with `POST /claims/`
    2. Members vote with `POST /claims/{id}/votes` until the voting deadline
    3. After the deadline anyone calls `POST /claims/{id}/finalize`
    4. Claims with quorum and a yes majority are paid from the fund; the rest lapse

    Every mutating call carries `X-Caller` and `X-Block-Height` headers.
    """,
    version="1.0.0",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Include routers
app.include_router(dao_api_router)


@app.get("/", tags=["root"])
async def root():
    """Root endpoint with system info."""
    return {
        "system": "Emergency Relief DAO",
        "version": "1.0.0",
        "status": "operational",
        "docs": "/docs"
    }


@app.get("/health", tags=["health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
