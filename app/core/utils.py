"""
Utility functions for the application.

- Numeric one-time code generation and masking for logs
- Timezone normalisation and expiry checks for stored timestamps
- OpenAPI export helpers used by the management CLI
"""

from datetime import datetime, timedelta, timezone
import json
import secrets

import aiofiles
from fastapi import FastAPI

from app.core.config import utils_logger


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """
    Return ``value`` as a timezone-aware UTC datetime.

    Some drivers (SQLite) hand back naive datetimes even for
    ``DateTime(timezone=True)`` columns; those are stored in UTC.

    Examples:
        >>> ensure_utc(datetime(2024, 1, 1)).tzinfo
        datetime.timezone.utc
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def is_expired(expires_at: datetime, now: datetime | None = None) -> bool:
    """
    Check whether an expiry timestamp is in the past.

    Args:
        expires_at: The stored expiry, naive values are treated as UTC.
        now: Reference time. Defaults to the current UTC time.

    Returns:
        bool: True once ``now`` is strictly after ``expires_at``.
    """
    now = now or utc_now()
    return ensure_utc(now) > ensure_utc(expires_at)


def expiry_from_now(minutes: int, now: datetime | None = None) -> datetime:
    return (now or utc_now()) + timedelta(minutes=minutes)


def generate_numeric_code(length: int = 6) -> str:
    """
    Generate a numeric one-time code of the specified length.

    Args:
        length: Length of the code to generate. Default is 6.

    Returns:
        A string of ``length`` decimal digits; leading zeros are kept.

    Raises:
        ValueError: If length is not positive.
    """
    if length <= 0:
        raise ValueError("Code length must be positive")

    # Use secrets module for security-sensitive random numbers
    code = "".join(secrets.choice("0123456789") for _ in range(length))

    utils_logger.debug(f"Numeric code of length {length} generated successfully")
    return code


def mask_code(code: str) -> str:
    """
    Mask a one-time code for logging purposes, showing only first and last digit.

    Examples:
        >>> mask_code("123456")
        '1****6'
        >>> mask_code("1234")
        '1**4'
        >>> mask_code("12")
        '12'
    """
    if len(code) <= 2:
        return code

    return f"{code[0]}{'*' * (len(code) - 2)}{code[-1]}"


def generate_openapi_json(app: FastAPI) -> str:
    """
    Generate OpenAPI JSON schema for the given FastAPI application.

    Args:
        app: The FastAPI application instance.

    Returns:
        A pretty-printed JSON string of the OpenAPI schema.
    """
    openapi_schema = app.openapi()

    openapi_json = json.dumps(openapi_schema, indent=4, ensure_ascii=False)
    utils_logger.info("OpenAPI JSON schema generated successfully")
    return openapi_json


async def write_to_file_async(file_path: str, data: str) -> None:
    """
    Asynchronously write data to a file.

    Args:
        file_path: Path to the file where data should be written.
        data: The string data to write to the file.
    """
    try:
        async with aiofiles.open(file_path, mode="w", encoding="utf-8") as file:
            await file.write(data)
        utils_logger.info(f"Data written to file {file_path} successfully.")
    except Exception as e:
        utils_logger.error(
            f"Failed to write data to file {file_path}: {type(e).__name__} - {str(e)}"
        )
        raise
