"""
FastAPI Application Entry Point
Main application setup and route registration
"""

import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.staticfiles import StaticFiles
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from app.config import settings
from app.database import connect_db, disconnect_db
from app.logging_config import setup_logging
from app.schemas.certificate import CertificateResponse
from app.services.certificate_service import CertificateService, build_verification_url
from app.services.event_service import EventService
from app.services.qrcode_service import VERIFY_QR_SIZE, create_qr_data_url

logger = setup_logging()

BASE_DIR = Path(__file__).resolve().parent.parent


class NoCacheMiddleware(BaseHTTPMiddleware):
    """Prevent browser from caching HTML pages"""
    async def dispatch(self, request: Request, call_next):
        response: Response = await call_next(request)
        ct = response.headers.get("content-type", "")
        if "text/html" in ct:
            response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate"
            response.headers["Pragma"] = "no-cache"
            response.headers["Expires"] = "0"
        return response


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Certificate generation, delivery and verification",
    version="1.0.0",
    debug=settings.DEBUG
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# No-cache middleware for HTML pages
app.add_middleware(NoCacheMiddleware)

# Setup Jinja2 templates
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))

# Mount static files
app.mount("/static", StaticFiles(directory=str(BASE_DIR / "static")), name="static")


# Custom 404 error handler - show friendly page instead of raw JSON
@app.exception_handler(404)
async def not_found_handler(request: Request, exc):
    accept = request.headers.get("accept", "")
    if request.url.path.startswith("/api/") or "application/json" in accept:
        detail = getattr(exc, "detail", None) or "Not Found"
        return JSONResponse(status_code=404, content={"detail": detail})
    return templates.TemplateResponse(
        request, "404.html", {"app_name": settings.APP_NAME}, status_code=404
    )


# Startup event
@app.on_event("startup")
async def startup():
    """Run on application startup"""
    await connect_db()
    logger.info("[START] %s started in %s mode", settings.APP_NAME, settings.APP_ENV)


# Shutdown event
@app.on_event("shutdown")
async def shutdown():
    """Run on application shutdown"""
    await disconnect_db()
    logger.info("[STOP] Shutdown complete")


# Health check endpoint
@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": "1.0.0"
    }


def _page_context(**extra) -> dict:
    return {
        "app_name": settings.APP_NAME,
        "admin_key_required": bool(settings.ADMIN_API_KEY),
        **extra
    }


# HTML Page Routes
@app.get("/", response_class=HTMLResponse)
async def home_page(request: Request):
    """Landing page"""
    return templates.TemplateResponse(request, "home.html", _page_context())


@app.get("/portal", response_class=HTMLResponse)
async def portal_page(request: Request):
    """Participant portal - search certificates by email"""
    return templates.TemplateResponse(request, "portal.html", _page_context())


@app.get("/verify/{certificate_uuid}", response_class=HTMLResponse)
async def verify_page(request: Request, certificate_uuid: str):
    """Public verification page; unknown ids get the invalid card, not an error"""
    record = await CertificateService.verify_certificate(certificate_uuid)
    if not record:
        return templates.TemplateResponse(
            request, "verify.html", _page_context(certificate=None)
        )

    certificate = CertificateResponse(**record)
    return templates.TemplateResponse(
        request,
        "verify.html",
        _page_context(
            certificate=certificate,
            qr_code=create_qr_data_url(build_verification_url(certificate_uuid), size=VERIFY_QR_SIZE)
        )
    )


@app.get("/admin", response_class=HTMLResponse)
async def admin_dashboard_page(request: Request):
    """Admin dashboard"""
    return templates.TemplateResponse(request, "admin/dashboard.html", _page_context())


@app.get("/admin/template", response_class=HTMLResponse)
async def admin_template_page(request: Request):
    """Template designer"""
    return templates.TemplateResponse(request, "admin/template.html", _page_context())


@app.get("/admin/upload", response_class=HTMLResponse)
async def admin_upload_page(request: Request, event_id: Optional[str] = None):
    """Participant upload; the selected event travels as ?event_id="""
    events = await EventService.list_events()
    selected = event_id if any(e["id"] == event_id for e in events) else None
    if selected is None and events:
        selected = events[0]["id"]
    return templates.TemplateResponse(
        request,
        "admin/upload.html",
        _page_context(events=events, selected_event_id=selected)
    )


@app.get("/admin/analytics", response_class=HTMLResponse)
async def admin_analytics_page(request: Request):
    """Analytics dashboard"""
    return templates.TemplateResponse(request, "admin/analytics.html", _page_context())


# Import and include routers
from app.routes import events, certificates, notifications, public

app.include_router(events.router, prefix="/api", tags=["Events"])
app.include_router(certificates.router, prefix="/api", tags=["Certificates"])
app.include_router(notifications.router, prefix="/api", tags=["Notifications"])
app.include_router(public.router, prefix="/api", tags=["Public"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
