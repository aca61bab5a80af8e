"""Record store HTTP client for reading the user database"""

import httpx
from typing import Optional
from vault_gateway.domain.models import RecordCollection, RecordDefaults
from vault_gateway.domain.records import parse_collection
from vault_gateway.domain.exceptions import MalformedResponseError, TransportError
from vault_gateway.infrastructure.observability.metrics import (
    vault_fetch_failures_counter,
    vault_fetch_latency_histogram,
)
from vault_gateway.config import Settings, get_settings


class RecordStoreClient:
    """Stateless client for the remote record store (a Sheety spreadsheet view)"""

    def __init__(
        self,
        endpoint_url: str | None = None,
        timeout: float | None = None,
        collection_field: str | None = None,
        defaults: RecordDefaults | None = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        settings: Settings | None = None,
    ):
        if settings is None:
            settings = Settings(endpoint_url=endpoint_url) if endpoint_url else get_settings()
        self.endpoint_url = endpoint_url or settings.endpoint_url
        self.timeout = timeout or settings.http_timeout_seconds
        self.collection_field = collection_field or settings.collection_field
        self.defaults = defaults or RecordDefaults(
            currency=settings.default_currency,
            credit_score=settings.default_credit_score,
            account_status=settings.default_account_status,
        )
        self.transport = transport

    async def fetch_all(self) -> RecordCollection:
        """
        Read the full user collection with a single GET. No retries.

        Raises:
            TransportError: On network failure, timeout, or non-2xx status
            MalformedResponseError: If the body is not the expected collection
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                with vault_fetch_latency_histogram.time():
                    response = await client.get(self.endpoint_url)
                    response.raise_for_status()
            except httpx.TimeoutException as e:
                vault_fetch_failures_counter.labels(reason="transport").inc()
                raise TransportError(f"Record store timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                vault_fetch_failures_counter.labels(reason="transport").inc()
                raise TransportError(f"Record store error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                vault_fetch_failures_counter.labels(reason="transport").inc()
                raise TransportError(f"Record store unreachable: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            vault_fetch_failures_counter.labels(reason="malformed").inc()
            raise MalformedResponseError(f"Record store returned invalid JSON: {e}") from e

        try:
            return parse_collection(payload, self.collection_field, self.defaults)
        except MalformedResponseError:
            vault_fetch_failures_counter.labels(reason="malformed").inc()
            raise
