"""
HTTP client for a remote toxicity model server.

Communicates with the inference server using httpx AsyncClient:
- POST /predict: run the model on one encoded input
- GET /health: liveness / model-loaded probe

Connection pooling via a persistent client, retry with exponential backoff on
network errors.
"""

import asyncio
import time
from typing import Optional

import httpx
import structlog

from toxicity_filter.classifier.base_classifier import (
    BaseToxicityClassifier,
    prediction_from_probabilities,
)
from toxicity_filter.classifier.exceptions import (
    ClassifierConnectionError,
    ClassifierError,
    ClassifierInvalidOutputError,
    ClassifierTimeoutError,
    ClassifierUnavailableError,
)
from toxicity_filter.models.classifier_models import ToxicityPrediction

logger = structlog.get_logger(__name__)

UNAVAILABLE_STATUS_CODES = (404, 503)


class HTTPToxicityClassifier(BaseToxicityClassifier):
    """
    Toxicity classifier backed by a model server over HTTP.

    Request:
        {"model": "toxic-bert", "input_ids": [...], "attention_mask": [...]}

    Response:
        {"probabilities": [0.01, 0.00, 0.02, 0.00, 0.01, 0.00]}

    The probability vector is index-ordered like ToxicityLabel.
    """

    def __init__(
        self,
        base_url: str,
        model_name: str = "toxic-bert",
        timeout: float = 2.0,
        max_retries: int = 2,
        retry_backoff: float = 0.1,
        connection_limits: Optional[httpx.Limits] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            base_url: Model server URL (e.g., http://classifier:8080)
            model_name: Model name sent with each request
            timeout: Per-request timeout in seconds
            max_retries: Maximum attempts when the server is unreachable
            retry_backoff: Base backoff in seconds, doubled per attempt
            connection_limits: httpx connection pool limits (default: 10 max connections)
            transport: Custom httpx transport (used by tests)
        """
        super().__init__(model_name)
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.retry_backoff = retry_backoff

        if connection_limits is None:
            connection_limits = httpx.Limits(
                max_keepalive_connections=5,
                max_connections=10,
                keepalive_expiry=30.0,
            )

        self._client: Optional[httpx.AsyncClient] = None
        self._connection_limits = connection_limits
        self._transport = transport

        logger.info(
            "HTTP classifier initialized",
            base_url=self.base_url,
            model_name=model_name,
            timeout=timeout,
            max_retries=self.max_retries,
        )

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                limits=self._connection_limits,
                transport=self._transport,
            )
            logger.debug("Created new httpx AsyncClient")
        return self._client

    async def predict(
        self, token_ids: list[int], attention_mask: list[int]
    ) -> ToxicityPrediction:
        start_time = time.perf_counter()
        payload = {
            "model": self.model_name,
            "input_ids": token_ids,
            "attention_mask": attention_mask,
        }

        for attempt in range(1, self.max_retries + 1):
            try:
                client = await self._get_client()
                response = await client.post("/predict", json=payload)
                response.raise_for_status()

            except httpx.TimeoutException as e:
                logger.warning(
                    "Classifier request timeout",
                    attempt=attempt,
                    timeout=self.timeout,
                    error=str(e),
                )
                raise ClassifierTimeoutError(
                    f"Classifier request timeout after {self.timeout}s",
                    details={"attempt": attempt, "timeout": self.timeout},
                ) from e

            except httpx.HTTPStatusError as e:
                status_code = e.response.status_code
                logger.error(
                    "Classifier HTTP error",
                    status_code=status_code,
                    error_text=e.response.text,
                    attempt=attempt,
                )
                if status_code in UNAVAILABLE_STATUS_CODES:
                    raise ClassifierUnavailableError(
                        f"Classifier model not available: {self.model_name}",
                        details={"model": self.model_name, "status": status_code},
                    ) from e
                raise ClassifierError(
                    f"Classifier server error: {status_code}",
                    details={"status": status_code, "error": e.response.text},
                ) from e

            except (httpx.NetworkError, httpx.ConnectError) as e:
                logger.warning(
                    "Classifier network error",
                    attempt=attempt,
                    max_retries=self.max_retries,
                    error=str(e),
                )
                if attempt < self.max_retries:
                    backoff = self.retry_backoff * 2 ** (attempt - 1)
                    logger.info("Retrying classifier request", backoff_seconds=backoff)
                    await asyncio.sleep(backoff)
                    continue
                raise ClassifierConnectionError(
                    f"Network error: {e}",
                    details={"attempt": attempt, "error_type": type(e).__name__},
                ) from e

            prediction = self._parse_response(response)
            logger.debug(
                "Classifier prediction received",
                model=self.model_name,
                latency_ms=int((time.perf_counter() - start_time) * 1000),
                attempt=attempt,
            )
            return prediction

        raise ClassifierConnectionError("Classifier request failed after all retries")

    def _parse_response(self, response: httpx.Response) -> ToxicityPrediction:
        try:
            data = response.json()
        except ValueError as e:
            raise ClassifierInvalidOutputError(
                "Invalid JSON response from classifier",
                details={"parse_error": str(e)},
            ) from e

        probabilities = data.get("probabilities") if isinstance(data, dict) else None
        if not isinstance(probabilities, list):
            raise ClassifierInvalidOutputError(
                "Classifier response has no 'probabilities' list",
                details={"response_type": type(data).__name__},
            )
        return prediction_from_probabilities(probabilities)

    async def health_check(self) -> bool:
        """Check model server health via GET /health."""
        try:
            client = await self._get_client()
            response = await client.get("/health", timeout=5.0)
            response.raise_for_status()
            logger.debug("Classifier health check passed")
            return True
        except httpx.HTTPError as e:
            logger.warning("Classifier health check failed", error=str(e))
            return False

    async def close(self):
        """Close the HTTP client connection."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("Closed classifier HTTP client")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"base_url={self.base_url}, "
            f"model_name={self.model_name}, "
            f"timeout={self.timeout}s)"
        )
