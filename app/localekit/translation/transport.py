"""HTTP transport for provider requests.

Usage:
    transport = ProviderTransport(timeout=10.0)
    payloads = await transport.send_all(requests, backend)
"""

import asyncio
from typing import Any, List, Optional, Sequence

import httpx

from localekit.errors import ProviderError
from localekit.logging import get_module_logger
from localekit.translation.models import ProviderRequest
from localekit.translation.providers import ProviderBackend

logger = get_module_logger()


class ProviderTransport:
    """Sends provider requests over httpx and decodes their JSON bodies.

    HTTP error statuses are not raised here: providers describe failures in
    the body, which the backend inspects.

    Attributes:
        timeout: Timeout in seconds applied to each request.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
    ):
        self._client = client
        self.timeout = timeout
        self._logger = logger.bind(component="provider_transport")

    async def send_all(
        self, requests: Sequence[ProviderRequest], backend: ProviderBackend
    ) -> List[Any]:
        """Send ``requests`` concurrently and return their decoded payloads.

        All requests run to completion before the first failure, if any, is
        raised; no partial result is returned.

        Raises:
            ProviderError: On transport failure or provider error status.
            InvalidProviderResponseError: If a body cannot be decoded.
        """
        if self._client is not None:
            return await self._gather(self._client, requests, backend)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await self._gather(client, requests, backend)

    async def send(self, request: ProviderRequest, backend: ProviderBackend) -> Any:
        payloads = await self.send_all([request], backend)
        return payloads[0]

    async def _gather(
        self,
        client: httpx.AsyncClient,
        requests: Sequence[ProviderRequest],
        backend: ProviderBackend,
    ) -> List[Any]:
        results = await asyncio.gather(
            *(self._send_one(client, request, backend) for request in requests),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        return list(results)

    async def _send_one(
        self,
        client: httpx.AsyncClient,
        request: ProviderRequest,
        backend: ProviderBackend,
    ) -> Any:
        try:
            response = await client.request(
                request.method,
                request.url,
                params=request.params,
                data=request.data,
                timeout=self.timeout,
            )
        except httpx.HTTPError as e:
            self._logger.debug(
                "provider_request_failed",
                provider=backend.provider.value,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise ProviderError(
                "Unable to complete the request.", provider=backend.provider.value
            ) from e

        self._logger.debug(
            "provider_response_received",
            provider=backend.provider.value,
            status_code=response.status_code,
        )
        return backend.decode_response(response)
