from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app.core.config import request_logger
from app.core.exceptions.types import (
    AppException,
    AuthenticationException,
    ConflictException,
    DatabaseException,
    DependencyFailureException,
    ExpiredException,
    ForbiddenException,
    InvalidException,
    NotFoundException,
    TooManyAttemptsException,
    UnexpectedException,
    ValidationFailedException,
)


async def general_exception_handler(request: Request, exc: AppException):
    """
    Handles any AppException without a more specific handler.

    Args:
        request: The request object.
        exc (AppException): The exception instance.

    Returns:
        JSONResponse: A response containing the error message and the exception's status code.
    """
    request_logger.error(f"GeneralException: {exc}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": str(exc)},
    )


async def unexpected_exception_handler(
    request: Request, exc: UnexpectedException | DatabaseException
):
    """
    Handles unexpected and database failures with a generic message.

    The underlying error is logged but never returned to the client.

    Args:
        request: The request object.
        exc (UnexpectedException | DatabaseException): The exception instance.

    Returns:
        JSONResponse: A response with status code 500 and a generic message.
    """
    request_logger.error(
        f"{type(exc).__name__} on {request.method} {request.url.path}: {exc}"
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": UnexpectedException().message},
    )


async def validation_failed_exception_handler(
    request: Request, exc: ValidationFailedException
):
    """
    Handles validation failures, returning every violated rule.

    Args:
        request: The request object.
        exc (ValidationFailedException): The validation exception instance.

    Returns:
        JSONResponse: A response with status code 400, the message and the list of errors.
    """
    request_logger.warning(f"ValidationFailedException: {exc.errors}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": str(exc), "errors": exc.errors},
    )


async def authentication_exception_handler(
    request: Request, exc: AuthenticationException
):
    """
    Handles authentication exceptions by returning a JSON response.

    Args:
        request: The request object.
        exc (AuthenticationException): The authentication exception instance.

    Returns:
        JSONResponse: A response containing the error message and status code 401.
    """
    request_logger.warning(f"AuthenticationException: {exc}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": str(exc)},
        headers={"WWW-Authenticate": "Bearer"},
    )


async def forbidden_exception_handler(request: Request, exc: ForbiddenException):
    request_logger.warning(f"ForbiddenException: {exc}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": str(exc)},
    )


async def not_found_exception_handler(request: Request, exc: NotFoundException):
    request_logger.info(f"NotFoundException: {exc}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": str(exc)},
    )


async def conflict_exception_handler(request: Request, exc: ConflictException):
    request_logger.info(f"ConflictException: {exc}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": str(exc)},
    )


async def expired_exception_handler(request: Request, exc: ExpiredException):
    request_logger.warning(f"ExpiredException: {exc}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": str(exc)},
    )


async def invalid_exception_handler(request: Request, exc: InvalidException):
    request_logger.warning(f"InvalidException: {exc}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": str(exc)},
    )


async def too_many_attempts_exception_handler(
    request: Request, exc: TooManyAttemptsException
):
    """
    Handles too many attempts exceptions by returning a JSON response.

    Args:
        request: The request object.
        exc (TooManyAttemptsException): The too many attempts exception instance.

    Returns:
        JSONResponse: A response containing the error message and status code 429.
    """
    request_logger.warning(f"TooManyAttemptsException: {exc}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": str(exc)},
    )


async def dependency_failure_exception_handler(
    request: Request, exc: DependencyFailureException
):
    request_logger.error(f"DependencyFailureException: {exc}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": str(exc)},
    )


exception_schema = {
    status.HTTP_500_INTERNAL_SERVER_ERROR: {
        "description": "Internal Server Error",
        "content": {
            "application/json": {
                "example": {"detail": UnexpectedException().message},
            }
        },
    },
    status.HTTP_400_BAD_REQUEST: {
        "description": "Validation Error",
        "content": {
            "application/json": {
                "example": {
                    "detail": "Validation failed.",
                    "errors": ["Passwords do not match"],
                },
            }
        },
    },
}



# Most specific first; AppException is the catch-all
EXCEPTION_HANDLERS = [
    (ValidationFailedException, validation_failed_exception_handler),
    (TooManyAttemptsException, too_many_attempts_exception_handler),
    (AuthenticationException, authentication_exception_handler),
    (ForbiddenException, forbidden_exception_handler),
    (NotFoundException, not_found_exception_handler),
    (ConflictException, conflict_exception_handler),
    (ExpiredException, expired_exception_handler),
    (InvalidException, invalid_exception_handler),
    (DependencyFailureException, dependency_failure_exception_handler),
    (DatabaseException, unexpected_exception_handler),
    (UnexpectedException, unexpected_exception_handler),
    (AppException, general_exception_handler),
]


def register_exception_handlers(app: FastAPI) -> None:
    for exc_class, handler in EXCEPTION_HANDLERS:
        app.add_exception_handler(exc_class, handler)  # type: ignore[arg-type]


__all__ = [
    "general_exception_handler",
    "unexpected_exception_handler",
    "validation_failed_exception_handler",
    "authentication_exception_handler",
    "forbidden_exception_handler",
    "not_found_exception_handler",
    "conflict_exception_handler",
    "expired_exception_handler",
    "invalid_exception_handler",
    "too_many_attempts_exception_handler",
    "dependency_failure_exception_handler",
    "exception_schema",
    "EXCEPTION_HANDLERS",
    "register_exception_handlers",
]
