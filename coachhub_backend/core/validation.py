# validation.py
# Helpers for validating ids coming in from path/query parameters.

import re
import uuid
from typing import Optional
from fastapi import HTTPException
from loguru import logger

# Canonical 8-4-4-4-12 hex form
UUID_REGEX = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)


def is_valid_uuid(value) -> bool:
    """
    True if value is a UUID string.
    Rejects empty values and the literal strings "undefined"/"null" that
    mobile clients send when a route param was never filled in.
    """
    if not value or not isinstance(value, str):
        return False
    if value in ("undefined", "null"):
        return False
    return bool(UUID_REGEX.match(value))


def parse_uuid(value: Optional[str], param_name: str) -> uuid.UUID:
    """Parse a required id parameter, raising 400 with a readable message if it's bad."""
    if not value or not isinstance(value, str):
        logger.warning("Missing {} parameter", param_name)
        raise HTTPException(status_code=400, detail=f"{param_name} is required and must be a string")

    if value in ("undefined", "null"):
        logger.warning("{} sent as '{}'", param_name, value)
        raise HTTPException(status_code=400, detail=f"{param_name} cannot be '{value}'")

    if not is_valid_uuid(value):
        logger.warning("Invalid {} format: {}", param_name, value)
        raise HTTPException(status_code=400, detail=f"{param_name} must be a valid UUID")

    return uuid.UUID(value)


def parse_optional_uuid(value: Optional[str], param_name: str) -> Optional[uuid.UUID]:
    if value is None or value == "":
        return None
    return parse_uuid(value, param_name)
