from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from digital_prescription.config import settings
from digital_prescription.database import Database
from digital_prescription.routers import health_router
from digital_prescription.features.auth.router import router as auth_router
from digital_prescription.features.messages.router import router as messages_router
from digital_prescription.features.prescriptions.router import router as prescriptions_router
from digital_prescription.features.reminders.router import router as reminders_router
from digital_prescription.features.side_effects.router import router as side_effects_router
from digital_prescription.core.logging import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan events for FastAPI application."""
    # Startup
    logger.info("Starting Digital Prescription API...")
    await Database.connect_db()
    logger.info("Application started successfully")

    yield

    # Shutdown
    logger.info("Shutting down...")
    await Database.close_db()
    logger.info("Application shutdown complete")


app = FastAPI(
    title=settings.APP_NAME,
    description="Digital prescription backend: symptom routing, prescriptions and medication reminders",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(auth_router, prefix=settings.API_V1_PREFIX)
app.include_router(messages_router, prefix=settings.API_V1_PREFIX)
app.include_router(prescriptions_router, prefix=settings.API_V1_PREFIX)
app.include_router(reminders_router, prefix=settings.API_V1_PREFIX)
app.include_router(side_effects_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": settings.APP_NAME,
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health",
    }
