"""Shared dependencies for API routes."""

import logging

from fastapi import HTTPException

from services.reference_data import ReferenceData, ReferenceDataError, get_default_reference_data

logger = logging.getLogger(__name__)


def get_reference_data() -> ReferenceData:
    """Configured reference data, or 503 when it cannot be loaded."""
    try:
        return get_default_reference_data()
    except ReferenceDataError as e:
        logger.error("Reference data unavailable: %s", e)
        raise HTTPException(status_code=503, detail="Reference data unavailable") from e
