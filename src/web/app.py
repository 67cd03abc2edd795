import logging
from pathlib import Path

from fastapi import Depends, FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates

from src import __version__
from src.config.settings import AppSettings, get_settings
from src.core.variance_engine import describe_noise
from src.services.audit_service import AuditService
from src.web.dependencies import get_audit_service, get_current_user_id
from src.web.routers import admin, attachments, coaching, decisions, judgments

logger = logging.getLogger("web")

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"

app = FastAPI(title="Clarvoy Decision Service", version=__version__)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled server error")
    return JSONResponse(status_code=500, content={"detail": str(exc)})


templates = Jinja2Templates(directory=str(TEMPLATE_DIR))


# Initialize database on startup
@app.on_event("startup")
async def startup_event():
    """Initialize database on application startup"""
    from src.models.database import create_tables, init_database

    settings = get_settings()
    logger.info("Initializing database...")
    init_database(database_url=settings.database_url, echo=settings.database_echo)
    if settings.auto_create_tables:
        # Alembic owns the schema in production; this keeps local sqlite usable
        create_tables()
    logger.info("Database initialized")


# Include API routers
app.include_router(decisions.router)
app.include_router(judgments.router)
app.include_router(attachments.router)
app.include_router(coaching.router)
app.include_router(admin.router)


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/admin", response_class=HTMLResponse)
def admin_page(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    audit_service: AuditService = Depends(get_audit_service),
    settings: AppSettings = Depends(get_settings),
):
    """Governance dashboard: decision analytics and recent audit entries"""
    stats = audit_service.decision_stats(high_noise_threshold=settings.high_noise_threshold)
    noisy = [
        {**item, "summary": describe_noise(item["variance"])} for item in stats["high_noise_decisions"]
    ]
    logs = audit_service.list_logs(limit=50)
    return templates.TemplateResponse(
        request,
        "admin.html",
        {"stats": stats, "noisy": noisy, "logs": list(reversed(logs))},
    )
