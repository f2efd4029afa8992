"""Concrete implementations for completion services."""

import logging
import os
import time
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Tuple

import openai

from .config import API_KEY_VARS, GENERIC_API_KEY_VAR, PROVIDER_ENDPOINTS, Settings
from .errors import CompletionError, ConfigurationError, TransportError
from .models import USER_ROLE, ChatTurn, CompletionOptions

logger = logging.getLogger(__name__)

_STATUS_MESSAGES = {
    401: "Invalid API key. Check the credential configured for the provider.",
    429: "Rate limited. Please wait a moment and try again.",
    503: "The completion service is temporarily unavailable.",
}

TIMEOUT_MESSAGE = "Request timed out. The completion service is taking too long to respond."
CONNECTION_CHECK_PROMPT = 'Say "Hello, I am working!" in exactly those words.'


class CompletionService(ABC):
    """Abstract Base Class for all completion services."""

    @abstractmethod
    def complete(
        self, turns: List[ChatTurn], options: Optional[CompletionOptions] = None
    ) -> str:
        """Sends chat turns to the backend and returns the generated text.

        Parameters
        ----------
        turns : List[ChatTurn]
            Ordered, role-tagged turns forming the prompt.
        options : CompletionOptions, optional
            Temperature, token limit and timeout. Defaults apply when omitted.

        Returns
        -------
        str
            The generated text. Never empty.

        Raises
        ------
        ConfigurationError
            No credential or endpoint is configured.
        TransportError
            The request failed, timed out, or returned no usable content.
        """
        pass

    def check_connection(self) -> Tuple[bool, str]:
        """Sends a tiny request to verify the credential, endpoint and model.

        Returns ``(True, reply)`` on success and ``(False, error message)``
        otherwise. Never raises a ``CompletionError``.
        """
        turns = [ChatTurn(role=USER_ROLE, content=CONNECTION_CHECK_PROMPT)]
        try:
            return True, self.complete(turns, CompletionOptions(max_tokens=50, timeout=10.0))
        except CompletionError as e:
            logger.warning("Connection check failed: %s", e)
            return False, str(e)


class OpenAICompatible(CompletionService):
    """Chat-completions client for any OpenAI-compatible endpoint.

    The client is created lazily so a missing credential surfaces as a
    ``ConfigurationError`` on the first request rather than at import or
    construction time. Retries are disabled; retry policy belongs to the
    caller. ``options.timeout`` is a deadline for the whole request, not only
    for each socket read.
    """

    provider = "openai"
    default_model = "gpt-4o-mini"

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        default_model: Optional[str] = None,
        extra_headers: Optional[Dict[str, str]] = None,
    ):
        if api_key is None:
            api_key = os.environ.get(API_KEY_VARS.get(self.provider, GENERIC_API_KEY_VAR), "")
        self.api_key = api_key.strip()
        if base_url is None:
            base_url = PROVIDER_ENDPOINTS.get(self.provider, "")
        self.base_url = base_url
        self.model = default_model or self.default_model
        self.extra_headers = extra_headers or {}
        self._client = None

    @property
    def client(self) -> openai.OpenAI:
        if not self.api_key:
            raise ConfigurationError(
                f"API key not configured for provider '{self.provider}'. "
                f"Set {API_KEY_VARS.get(self.provider, GENERIC_API_KEY_VAR)} in the environment or .env file."
            )
        if not self.base_url:
            raise ConfigurationError(
                f"No endpoint configured for provider '{self.provider}'. Set AI_ENDPOINT."
            )
        if self._client is None:
            self._client = openai.OpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                max_retries=0,
                default_headers=self.extra_headers or None,
            )
        return self._client

    def generate_response(
        self, messages: List[Dict[str, Any]], model: Optional[str] = None, **kwargs: Any
    ) -> Any:
        return self.client.chat.completions.create(
            messages=messages, model=model or self.model, **kwargs
        )

    def extract_content(self, response: Any) -> str:
        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError, KeyError, TypeError) as e:
            raise TransportError("Malformed completion response.") from e
        if not isinstance(content, str) or not content.strip():
            raise TransportError("Completion response contained no text.")
        return content

    def extract_delta(self, chunk: Any) -> Optional[str]:
        try:
            return chunk.choices[0].delta.content
        except (AttributeError, IndexError, KeyError, TypeError):
            return None

    @contextmanager
    def _translate_errors(self, options: CompletionOptions) -> Iterator[None]:
        try:
            yield
        except openai.APITimeoutError as e:
            logger.error("Completion request timed out after %ss", options.timeout)
            raise TransportError(TIMEOUT_MESSAGE) from e
        except openai.APIStatusError as e:
            logger.error("Completion request failed with status %s", e.status_code)
            message = _STATUS_MESSAGES.get(
                e.status_code, f"Completion API error: {e.status_code} - {e.message}"
            )
            raise TransportError(message, status_code=e.status_code) from e
        except openai.APIError as e:
            logger.error("Completion request failed: %s", e)
            raise TransportError(f"Completion request failed: {e}") from e

    def complete(
        self, turns: List[ChatTurn], options: Optional[CompletionOptions] = None
    ) -> str:
        options = options or CompletionOptions()
        messages = [turn.model_dump() for turn in turns]
        self.client  # raises ConfigurationError before any thread is started
        logger.debug(
            "Requesting completion from %s with model %s", self.base_url, self.model
        )

        # The SDK timeout applies to each read; the future bounds the whole call
        executor = ThreadPoolExecutor(max_workers=1)
        try:
            with self._translate_errors(options):
                future = executor.submit(
                    self.generate_response,
                    messages,
                    temperature=options.temperature,
                    max_tokens=options.max_tokens,
                    stream=False,
                    timeout=options.timeout,
                )
                try:
                    response = future.result(timeout=options.timeout)
                except FutureTimeoutError as e:
                    future.cancel()
                    logger.error(
                        "Completion request exceeded its %ss deadline", options.timeout
                    )
                    raise TransportError(TIMEOUT_MESSAGE) from e
        finally:
            executor.shutdown(wait=False)

        logger.debug("Completion received")
        return self.extract_content(response)

    def stream(
        self, turns: List[ChatTurn], options: Optional[CompletionOptions] = None
    ) -> Iterator[str]:
        """Yields the reply as text fragments while the backend produces them.

        Errors are mapped exactly as in ``complete``. The timeout is a deadline
        for the whole stream, checked as each chunk arrives.
        """
        options = options or CompletionOptions()
        messages = [turn.model_dump() for turn in turns]
        deadline = time.monotonic() + options.timeout
        received = False
        with self._translate_errors(options):
            response = self.generate_response(
                messages,
                temperature=options.temperature,
                max_tokens=options.max_tokens,
                stream=True,
                timeout=options.timeout,
            )
            try:
                for chunk in response:
                    if time.monotonic() > deadline:
                        logger.error(
                            "Completion stream exceeded its %ss deadline", options.timeout
                        )
                        raise TransportError(TIMEOUT_MESSAGE)
                    text = self.extract_delta(chunk)
                    if text:
                        received = True
                        yield text
            finally:
                response.close()
        if not received:
            raise TransportError("Completion response contained no text.")


class OpenAI(OpenAICompatible):
    provider = "openai"
    default_model = "gpt-4o-mini"


class Groq(OpenAICompatible):
    provider = "groq"
    default_model = "llama-3.3-70b-versatile"


class OpenRouter(OpenAICompatible):
    provider = "openrouter"
    default_model = "google/gemini-2.0-flash-exp:free"

    def __init__(self, *args, **kwargs):
        kwargs.setdefault(
            "extra_headers",
            {
                "HTTP-Referer": "http://localhost:8050",
                "X-Title": "Aurora Career Guide",
            },
        )
        super().__init__(*args, **kwargs)


PROVIDERS = {
    "openai": OpenAI,
    "groq": Groq,
    "openrouter": OpenRouter,
}


def from_settings(settings: Settings) -> OpenAICompatible:
    """Builds the completion service for the configured provider."""
    service_class = PROVIDERS.get(settings.provider, OpenAICompatible)
    service = service_class(
        api_key=settings.api_key,
        base_url=settings.base_url,
        default_model=settings.model,
    )
    service.provider = settings.provider
    return service


class Echo(CompletionService):
    """Offline service that answers with the tail of the prompt."""

    def __init__(self, delay: float = 0.0):
        self.delay = delay

    def complete(self, turns, options=None):
        if self.delay:
            time.sleep(self.delay)
        user_prompt = turns[-1].content if turns else "No message provided"
        return f"**Echo LLM - static response for testing**\n\n_Your prompt:_\n\n{user_prompt}"
