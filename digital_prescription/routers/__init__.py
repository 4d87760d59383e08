"""Application-level routers."""

from digital_prescription.routers.health import router as health_router

__all__ = ["health_router"]
