"""FastAPI application for the orchestration engine.

Endpoints:
- GET  /health                 database connectivity
- POST /route                  should a message be orchestrated, and as what
- POST /orchestrate            run the full multi-agent pipeline
- GET  /sessions/{session_id}  stored session record
"""

from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, field_validator
from sqlalchemy import text

from orchestra import __version__
from orchestra.agents.orchestrator import Orchestrator, create_orchestrator
from orchestra.core.config import settings
from orchestra.core.database import get_db, init_db
from orchestra.core.errors import OrchestrationError
from orchestra.core.logging import RequestIDMiddleware, configure_logging, get_logger
from orchestra.core.schemas import (
    CostSensitivity,
    DeliverableType,
    OrchestrationRequest,
    Preferences,
    QualityLevel,
    SpeedPriority,
    utcnow,
)
from orchestra.core.sessions import SessionStore, SqlAlchemySessionStore
from orchestra.routing import detect_deliverable_type, should_orchestrate

# Configure structured logging
configure_logging()
logger = get_logger(__name__)

# =============================================================================
# FastAPI App Setup
# =============================================================================

app = FastAPI(
    title="Orchestra API",
    description="Multi-agent deliverable orchestration",
    version=__version__,
    docs_url="/docs" if settings.log_level == "DEBUG" else None,
    redoc_url="/redoc" if settings.log_level == "DEBUG" else None,
)

app.add_middleware(RequestIDMiddleware)

origins = settings.cors_origins.split(",") if settings.cors_origins != "*" else ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Dependencies
# =============================================================================

_session_store: Optional[SessionStore] = None
_orchestrator: Optional[Orchestrator] = None


def get_session_store() -> SessionStore:
    global _session_store
    if _session_store is None:
        _session_store = SqlAlchemySessionStore()
    return _session_store


def get_orchestrator(store: SessionStore = Depends(get_session_store)) -> Orchestrator:
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = create_orchestrator(session_store=store)
    return _orchestrator


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(OrchestrationError)
async def orchestration_exception_handler(request: Request, exc: OrchestrationError):
    """Pipeline failures are upstream failures; a reused session id is a conflict."""
    logger.warning(
        "orchestration_error",
        path=request.url.path,
        code=exc.code,
        session_id=exc.session_id,
        error=str(exc),
    )
    return JSONResponse(
        status_code=409 if exc.code == "SESSION_EXISTS" else 502,
        content={"detail": str(exc), "code": exc.code, "session_id": exc.session_id},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors."""
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        exc_info=True,
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "type": "internal_error"},
    )


# =============================================================================
# Pydantic Models with Validation
# =============================================================================

class PreferencesModel(BaseModel):
    quality_level: Optional[QualityLevel] = None
    speed_priority: Optional[SpeedPriority] = None
    cost_sensitivity: Optional[CostSensitivity] = None
    target_audience: Optional[str] = Field(None, max_length=500)
    tone: Optional[str] = Field(None, max_length=100)
    length: Optional[str] = Field(None, pattern="^(short|medium|long)$")
    include_images: bool = False
    disable_grounding: bool = False

    def to_preferences(self) -> Preferences:
        return Preferences(**self.model_dump())


class OrchestrateRequest(BaseModel):
    user_id: str = Field(..., min_length=1, max_length=255)
    task: str = Field(..., min_length=1, max_length=10000, description="Free-text task to orchestrate")
    deliverable_type: Optional[DeliverableType] = None
    context: Dict[str, Any] = Field(default_factory=dict, description="Additional context")
    preferences: PreferencesModel = Field(default_factory=PreferencesModel)
    session_id: Optional[str] = Field(None, max_length=36)

    @field_validator("task")
    @classmethod
    def task_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Task cannot be empty or whitespace only")
        return v.strip()

    def to_request(self) -> OrchestrationRequest:
        return OrchestrationRequest(
            user_id=self.user_id,
            task=self.task,
            deliverable_type=self.deliverable_type,
            context=dict(self.context),
            preferences=self.preferences.to_preferences(),
            session_id=self.session_id,
        )


class RouteRequest(BaseModel):
    content: str = Field(..., min_length=1, max_length=10000)
    agent_id: Optional[str] = None


class RouteResponse(BaseModel):
    orchestrate: bool
    deliverable_type: DeliverableType


# =============================================================================
# Startup & Health
# =============================================================================

@app.on_event("startup")
async def startup():
    """Create session tables on startup."""
    logger.info("application_starting", version=__version__)
    init_db()
    logger.info("application_started")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    try:
        with get_db() as db:
            db.execute(text("SELECT 1"))
        db_status = "healthy"
    except Exception as e:
        db_status = f"unhealthy: {str(e)}"

    return {
        "status": "healthy" if db_status == "healthy" else "degraded",
        "timestamp": utcnow().isoformat(),
        "database": db_status,
        "version": __version__,
    }


# =============================================================================
# Orchestration Endpoints
# =============================================================================

@app.post("/route", response_model=RouteResponse)
async def route_message(body: RouteRequest):
    """Decide whether a chat message should go through orchestration."""
    return RouteResponse(
        orchestrate=should_orchestrate(body.content, body.agent_id),
        deliverable_type=detect_deliverable_type(body.content),
    )


@app.post("/orchestrate")
async def orchestrate(
    body: OrchestrateRequest,
    orchestrator: Orchestrator = Depends(get_orchestrator),
):
    """Run the multi-agent pipeline and return the deliverable with its trace."""
    logger.info("orchestration_requested", user_id=body.user_id, task_length=len(body.task))
    result = await orchestrator.orchestrate(body.to_request())
    return result.to_dict()


@app.get("/sessions/{session_id}")
async def get_session(session_id: str, store: SessionStore = Depends(get_session_store)):
    """Fetch a stored orchestration session."""
    session = await store.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session
