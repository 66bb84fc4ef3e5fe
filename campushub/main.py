"""
FastAPI Application Entry Point
Main application setup and route registration
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from campushub.config import settings
from campushub.database import connect_db, disconnect_db
from campushub.exceptions import CampusHubError
from campushub.logging_config import setup_logging
from campushub.scheduler import init_scheduler, shutdown_scheduler

setup_logging()
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Club events and registrations for the campus",
    version="1.0.0",
    debug=settings.DEBUG
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure this in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(CampusHubError)
async def campushub_error_handler(request: Request, exc: CampusHubError):
    """Domain errors become {success: false, message} with the error's status code"""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.message}
    )


# Startup event
@app.on_event("startup")
async def startup():
    """Run on application startup"""
    await connect_db()
    if settings.SCHEDULER_ENABLED:
        init_scheduler()
    logger.info("%s started in %s mode", settings.APP_NAME, settings.APP_ENV)


# Shutdown event
@app.on_event("shutdown")
async def shutdown():
    """Run on application shutdown"""
    shutdown_scheduler()
    await disconnect_db()
    logger.info("Shutdown complete")


# Health check endpoint
@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": "1.0.0"
    }


# Include routers
from campushub.routes import clubs, events, registrations, payments, otp, notifications, maintenance

app.include_router(clubs.router, prefix="/api/clubs", tags=["Clubs"])
app.include_router(events.router, prefix="/api", tags=["Events"])
app.include_router(registrations.router, prefix="/api", tags=["Registrations"])
app.include_router(payments.router, prefix="/api/payments", tags=["Payments"])
app.include_router(otp.router, prefix="/api/otp", tags=["Verification"])
app.include_router(notifications.router, prefix="/api/me/notifications", tags=["Notifications"])
app.include_router(maintenance.router, prefix="/api/platform/maintenance", tags=["Platform Admin"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("campushub.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)
