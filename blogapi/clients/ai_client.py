from logging import getLogger

from google.genai import Client
from google.genai.client import AsyncClient
from google.genai.errors import ClientError, ServerError
from google.genai.types import GenerateContentConfig
from httpx import RemoteProtocolError, TimeoutException
from pydantic import BaseModel

from blogapi.configs import file_logger, settings
from blogapi.configs.settings import GEMINI_MODEL
from blogapi.decorators import with_retry
from blogapi.errors import (
    AIGenerationError,
    AiAuthenticationError,
    AiError,
    AiNetworkError,
    AiNotConfiguredError,
    AiQuotaExceededError,
)
from blogapi.managers.circuit_breaker import CircuitBreaker, ai_circuit_breaker
from blogapi.managers.metrics import metrics_manager

logger = file_logger(getLogger(__name__))

# Network-related exceptions that should be caught and converted
NETWORK_EXCEPTIONS = (
    RemoteProtocolError,
    TimeoutException,
    ConnectionError,
)

RETRIABLE_EXCEPTIONS = (
    AiNetworkError,
    AIGenerationError,
    ServerError,
    RemoteProtocolError,
    TimeoutException,
)


class AiClient:
    """
    Async client for Google's Gemini API.

    Calls go through a retrying ``_generate_content`` wrapped in the AI
    circuit breaker. Without ``GEMINI_API_KEY`` the client is created in a
    disabled state and every call raises ``AiNotConfiguredError``.
    """

    def __init__(
        self,
        api_key: str | None = None,
        circuit_breaker: CircuitBreaker | None = ai_circuit_breaker,
    ) -> None:
        self._model = GEMINI_MODEL
        self._temperature = settings.AI_TEMPERATURE
        self._max_output_tokens = settings.AI_MAX_OUTPUT_TOKENS
        self._circuit_breaker = circuit_breaker
        self._client: AsyncClient | None = None

        key = api_key or settings.GEMINI_API_KEY
        if not key:
            logger.warning("GEMINI_API_KEY is not set, AI suggestions are disabled")
            return

        self._client = Client(api_key=key).aio
        logger.info(f"AiClient initialized with model: {self._model}")

    @property
    def configured(self) -> bool:
        return self._client is not None

    @property
    def model(self) -> str:
        return self._model

    @with_retry(
        max_retries=settings.AI_MAX_RETRIES,
        base_delay=settings.AI_RETRY_DELAY,
        max_delay=settings.AI_REQUEST_TIMEOUT,
        exec_retry=RETRIABLE_EXCEPTIONS,
    )
    async def _generate_content(self, contents: str, config: GenerateContentConfig) -> object:
        """
        Send one generation request.

        Args:
            contents: The prompt to send to the model.
            config: The configuration for the content generation.

        Returns:
            The parsed response matching ``config.response_schema``.

        Raises:
            AIGenerationError: If the model returns nothing usable.
        """
        if self._client is None:
            raise AiNotConfiguredError

        response = await self._client.models.generate_content(
            model=self._model,
            contents=contents,
            config=config,
        )

        if not response or not response.text:
            msg = "Empty response from Gemini API"
            raise AIGenerationError(detail=msg)
        schema = config.response_schema
        if isinstance(schema, type) and not isinstance(response.parsed, schema):
            msg = f"Unexpected response type: {type(response.parsed)}, expected {schema}"
            raise AIGenerationError(detail=msg)
        return response.parsed

    async def do_service[RespT: BaseModel](
        self,
        contents: str,
        system_instruction: str,
        resp_type: type[RespT],
        temperature: float | None = None,
    ) -> RespT:
        """
        Generate structured content with circuit breaker protection.

        Args:
            contents: The prompt to send to the model.
            system_instruction: The system instruction for the content generation.
            resp_type: Pydantic model the response is parsed into.
            temperature: Sampling temperature (defaults to ``AI_TEMPERATURE``).

        Returns:
            An instance of ``resp_type``.

        Raises:
            CircuitBreakerError: If the circuit breaker is open.
            AiError: If content generation fails.
        """
        if self._client is None:
            raise AiNotConfiguredError

        config = GenerateContentConfig(
            temperature=self._temperature if temperature is None else temperature,
            max_output_tokens=self._max_output_tokens,
            response_mime_type="application/json",
            response_schema=resp_type,
            system_instruction=system_instruction,
        )
        metrics_manager.record_ai_request(resp_type.__name__)

        try:
            if self._circuit_breaker:
                result = await self._circuit_breaker.call(self._generate_content, contents, config)
            else:
                result = await self._generate_content(contents, config)
        except NETWORK_EXCEPTIONS as e:
            logger.exception("AI network error")
            detail = f"AI service temporarily unavailable: {e}"
            raise AiNetworkError(detail=detail) from e
        except (AiError, ClientError, ServerError) as e:
            raise self._map_exception(e) from e
        return result  # type: ignore[return-value]

    @staticmethod
    def _map_exception(e: Exception) -> AiError:
        """Map provider errors onto the AiError family."""
        if isinstance(e, AiError):
            return e
        error_msg = str(e)
        logger.error(f"AI Error: {error_msg}")
        if "401" in error_msg or "unauthenticated" in error_msg.lower():
            return AiAuthenticationError(detail=f"Authentication failed: {error_msg}")
        if "429" in error_msg or "quota" in error_msg.lower():
            return AiQuotaExceededError(detail=f"Quota exceeded: {error_msg}")
        return AiError(detail=f"An unexpected error occurred: {error_msg}")

    async def close(self) -> None:
        if self._client is None:
            return
        logger.info("Closing AI client")
        await self._client.aclose()
