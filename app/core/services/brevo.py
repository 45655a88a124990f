"""
Brevo transactional email client.

Only ``POST /smtp/email`` is used. Requests are retried on 5xx, 429 and
network failures with bounded exponential backoff; any other 4xx is final.
Every failure that reaches the caller is a DependencyFailureException (502).
"""

import asyncio
import random
from typing import Any

import httpx
from pydantic import BaseModel

from app.core.config import brevo_logger, settings
from app.core.exceptions.types import DependencyFailureException
from app.core.services.base import SingletonService

RATE_LIMIT_RESET_HEADER = "x-sib-ratelimit-reset"


class Contact(BaseModel):
    email: str
    name: str | None = None


class ListContact(BaseModel):
    to: list[Contact]


def _body_of(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


class BrevoService(SingletonService):
    """Shared async HTTP client for the Brevo API."""

    _base_url: str = settings.BREVO_BASE_URL
    _api_key: str = settings.BREVO_API_KEY
    _sender_email: str = settings.BREVO_SENDER_EMAIL
    _sender_name: str = settings.BREVO_SENDER_NAME
    _client: httpx.AsyncClient | None = None

    _BACKOFF_BASE: float = 0.5
    _BACKOFF_MAX: float = 4.0
    _JITTER: float = 0.2
    _REQUEST_TIMEOUT: float = 5.0

    @classmethod
    def _init_client(cls) -> None:
        if cls._client is not None:
            return
        cls._client = httpx.AsyncClient(
            base_url=cls._base_url, timeout=httpx.Timeout(cls._REQUEST_TIMEOUT)
        )
        brevo_logger.info("Brevo HTTP client initialized")

    @classmethod
    async def aclose(cls) -> None:
        """Close the HTTP client. The reference is dropped even if closing fails."""
        client, cls._client = cls._client, None
        if client is None:
            return
        try:
            await client.aclose()
        finally:
            brevo_logger.info("Brevo HTTP client closed")

    @classmethod
    async def init(
        cls,
        api_key: str | None = None,
        sender_email: str | None = None,
        sender_name: str | None = None,
    ) -> None:
        """
        Configure credentials and sender, then open a fresh HTTP client.

        Arguments left as None keep their settings-derived values.
        """
        overrides = {
            "_api_key": api_key,
            "_sender_email": sender_email,
            "_sender_name": sender_name,
        }
        for attr, value in overrides.items():
            if value is not None:
                setattr(cls, attr, value)
        await cls.aclose()
        cls._init_client()
        cls._initialized = True

    @classmethod
    def _compute_backoff(
        cls, attempt: int, err_headers: httpx.Headers | None = None
    ) -> float:
        """
        Seconds to wait before retrying after failed ``attempt`` (1-based).

        Brevo's rate limit reset header is honoured when numeric, capped at
        ``_BACKOFF_MAX``. Otherwise the delay doubles from ``_BACKOFF_BASE``
        up to the cap and is scaled by a random factor within ``_JITTER``.
        """
        reset = err_headers.get(RATE_LIMIT_RESET_HEADER) if err_headers else None
        if reset is not None:
            try:
                return min(float(reset), cls._BACKOFF_MAX)
            except ValueError:
                brevo_logger.debug(f"Ignoring non-numeric rate limit reset: {reset}")
        delay = min(cls._BACKOFF_BASE * 2 ** (attempt - 1), cls._BACKOFF_MAX)
        return delay * random.uniform(1 - cls._JITTER, 1 + cls._JITTER)

    @classmethod
    def _auth_headers(cls, extra: dict[str, str] | None = None) -> dict[str, str]:
        return {
            "api-key": cls._api_key,
            "Content-Type": "application/json",
            "Accept": "application/json",
            **(extra or {}),
        }

    @classmethod
    async def _request(
        cls,
        method: str,
        endpoint: str,
        *,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        max_attempts: int = 3,
    ) -> dict[str, Any] | str:
        """
        Send one API call, retrying transient failures.

        Args:
            method: HTTP method.
            endpoint: Path relative to the Brevo base URL.
            json: Optional JSON body.
            headers: Extra headers layered over the auth headers.
            max_attempts: Total number of tries.

        Returns:
            The decoded JSON body, or the raw text if it is not JSON.

        Raises:
            DependencyFailureException: Immediately on a non-429 4xx, or once
                ``max_attempts`` is used up.
        """
        cls._init_client()
        assert cls._client is not None

        for attempt in range(1, max_attempts + 1):
            last_try = attempt == max_attempts
            try:
                response = await cls._client.request(
                    method, endpoint, headers=cls._auth_headers(headers), json=json
                )
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                status = exc.response.status_code
                detail = _body_of(exc.response)
                if status != 429 and status < 500:
                    brevo_logger.error(f"Brevo rejected {method} {endpoint}: {status} {detail}")
                    raise DependencyFailureException(
                        f"Email provider rejected the request: {status}"
                    ) from exc
                if last_try:
                    brevo_logger.error(f"Brevo still failing with {status}: {detail}")
                    raise DependencyFailureException(
                        f"Email provider error after retries: {status}"
                    ) from exc
                wait = cls._compute_backoff(
                    attempt, exc.response.headers if status == 429 else None
                )
                brevo_logger.warning(
                    f"Brevo returned {status} (attempt {attempt}/{max_attempts}), "
                    f"retrying in {wait:.1f}s: {detail}"
                )
            except httpx.TransportError as exc:
                if last_try:
                    brevo_logger.error(f"Brevo unreachable: {exc!r}")
                    raise DependencyFailureException(
                        "Email provider unreachable after retries"
                    ) from exc
                wait = cls._compute_backoff(attempt)
                brevo_logger.warning(
                    f"Brevo network error (attempt {attempt}/{max_attempts}), "
                    f"retrying in {wait:.1f}s: {exc!r}"
                )
            else:
                body = _body_of(response)
                brevo_logger.info(f"Brevo {method} {endpoint} accepted: {body}")
                return body
            await asyncio.sleep(wait)

        raise DependencyFailureException("No response from email provider")

    @classmethod
    async def send_transactional_email(
        cls,
        subject: str,
        to: ListContact,
        sender: Contact | None = None,
        textContent: str | None = None,
        htmlContent: str | None = None,
    ) -> dict[str, Any] | str:
        """
        Send one email through ``/smtp/email``.

        Raises:
            ValueError: If there is no body or no recipient.
            DependencyFailureException: If Brevo does not accept the email.
        """
        if not (htmlContent or textContent):
            raise ValueError("Either htmlContent or textContent must be provided")
        if not to.to:
            raise ValueError("At least one recipient must be provided")

        sender = sender or Contact(email=cls._sender_email, name=cls._sender_name)
        payload: dict[str, Any] = {
            "sender": sender.model_dump(exclude_none=True),
            "subject": subject,
            "to": [c.model_dump(exclude_none=True) for c in to.to],
        }
        for key, content in (("htmlContent", htmlContent), ("textContent", textContent)):
            if content:
                payload[key] = content

        return await cls._request(method="POST", endpoint="/smtp/email", json=payload)


__all__ = ["BrevoService", "Contact", "ListContact"]
