"""Digital Prescription - development server entry point."""

import uvicorn

from digital_prescription.config import settings


if __name__ == "__main__":
    uvicorn.run(
        "digital_prescription.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.DEBUG,
    )
