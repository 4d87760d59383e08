"""
Shared dependencies across the application.

This module contains dependency functions that can be used
across different features.
"""

from datetime import date
from digital_prescription.features.auth.dependencies import (
    get_current_user,
    get_current_doctor,
    get_current_patient,
)


def get_today() -> date:
    """Calendar date the request is evaluated against. Overridden in tests."""
    return date.today()


__all__ = ["get_current_user", "get_current_doctor", "get_current_patient", "get_today"]
