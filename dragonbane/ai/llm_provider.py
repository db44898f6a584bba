"""
LLM providers for narrative enrichment.

The enricher needs exactly one thing from a model: given a system prompt and
a user prompt, return text. Each client below wraps one SDK behind that
call and shares a single retry loop; a client that cannot be built (package
missing, no key) reports itself unavailable instead of raising.

Supported:
- OpenAI-compatible chat completion servers (OpenAI itself, or a local
  server such as LM Studio reached through a custom base URL)
- Anthropic Claude
- A scripted mock for tests and offline runs

The LLM only ever writes narrative text (names, appearance, background).
It never touches the rules data of a character.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional
import logging
import time
import os

logger = logging.getLogger(__name__)

DEFAULT_OPENAI_SERVER = "http://localhost:1234"
DEFAULT_OPENAI_MODEL = "deepseek-r1-distill-qwen-7b"
DEFAULT_ANTHROPIC_MODEL = "claude-sonnet-4-20250514"

# Local OpenAI-compatible servers ignore the key, but the client requires one
LOCAL_SERVER_API_KEY = "not-needed"


class LLMProvider(str, Enum):
    """Supported LLM providers."""

    ANTHROPIC = "anthropic"
    OPENAI = "openai"
    MOCK = "mock"


class LLMRole(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass
class LLMMessage:
    role: LLMRole
    content: str


@dataclass
class LLMResponse:
    """Text returned by a provider, or a fallback marker when errors is set."""

    content: str
    model: str
    provider: LLMProvider
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass
class LLMConfig:
    """Provider, model and connection settings."""

    provider: LLMProvider = LLMProvider.OPENAI
    model: str = DEFAULT_OPENAI_MODEL
    max_tokens: int = 1024
    temperature: float = 0.8
    api_key: Optional[str] = None
    base_url: Optional[str] = None  # OpenAI-compatible server root, e.g. http://localhost:1234
    timeout: float = 60.0

    max_retries: int = 3
    retry_delay: float = 1.0

    @classmethod
    def from_env(
        cls,
        provider: LLMProvider = LLMProvider.OPENAI,
        server: Optional[str] = None,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
    ) -> "LLMConfig":
        """
        Build a config from explicit values, falling back to the environment.

        OpenAI-compatible: OPENAI_SERVER, OPENAI_API_KEY, OPENAI_MODEL.
        Anthropic: ANTHROPIC_API_KEY, ANTHROPIC_MODEL.
        """
        if provider == LLMProvider.ANTHROPIC:
            return cls(
                provider=provider,
                model=model or os.getenv("ANTHROPIC_MODEL") or DEFAULT_ANTHROPIC_MODEL,
                api_key=api_key or os.getenv("ANTHROPIC_API_KEY"),
            )
        return cls(
            provider=provider,
            model=model or os.getenv("OPENAI_MODEL") or DEFAULT_OPENAI_MODEL,
            api_key=api_key or os.getenv("OPENAI_API_KEY"),
            base_url=server or os.getenv("OPENAI_SERVER") or DEFAULT_OPENAI_SERVER,
        )


# =============================================================================
# CLIENTS
# =============================================================================


class BaseLLMClient(ABC):
    """
    One SDK behind a retrying complete() call.

    Subclasses build their SDK handle in _connect() (None when unusable) and
    perform a single request in _send().
    """

    provider: LLMProvider

    def __init__(self, config: LLMConfig):
        self.config = config
        self._client: Any = self._connect()

    @abstractmethod
    def _connect(self) -> Any:
        """Build the SDK client, or return None if it cannot be used."""

    @abstractmethod
    def _send(self, messages: list[LLMMessage], system_prompt: Optional[str]) -> str:
        """Perform one request and return the reply text."""

    def is_available(self) -> bool:
        return self._client is not None

    def _fallback(self, error: str) -> LLMResponse:
        return LLMResponse(
            content=f"[LLM {error.replace('_', ' ')}]",
            model=self.config.model,
            provider=self.provider,
            errors=[error],
        )

    def complete(
        self,
        messages: list[LLMMessage],
        system_prompt: Optional[str] = None,
    ) -> LLMResponse:
        """Send the conversation, retrying with linear backoff."""
        if not self.is_available():
            return self._fallback("client_unavailable")

        for attempt in range(self.config.max_retries):
            try:
                content = self._send(messages, system_prompt)
                return LLMResponse(content=content, model=self.config.model, provider=self.provider)
            except Exception as e:
                logger.warning(f"{self.provider.value} request attempt {attempt + 1} failed: {e}")
                if attempt < self.config.max_retries - 1:
                    time.sleep(self.config.retry_delay * (attempt + 1))

        return self._fallback("request_failed")


class AnthropicClient(BaseLLMClient):
    """Claude via the anthropic package."""

    provider = LLMProvider.ANTHROPIC

    def _connect(self) -> Any:
        try:
            import anthropic
        except ImportError:
            logger.warning(
                "anthropic package not installed. "
                "Install with: pip install dragonbane-character-generator[llm-anthropic]"
            )
            return None

        api_key = self.config.api_key or os.getenv("ANTHROPIC_API_KEY")
        if not api_key:
            logger.warning("ANTHROPIC_API_KEY not set; Anthropic enrichment is unavailable")
            return None
        return anthropic.Anthropic(api_key=api_key, timeout=self.config.timeout)

    def _send(self, messages: list[LLMMessage], system_prompt: Optional[str]) -> str:
        response = self._client.messages.create(
            model=self.config.model,
            max_tokens=self.config.max_tokens,
            temperature=self.config.temperature,
            system=system_prompt or "",
            messages=[
                {"role": m.role.value, "content": m.content}
                for m in messages
                if m.role != LLMRole.SYSTEM
            ],
        )
        return response.content[0].text if response.content else ""


class OpenAIClient(BaseLLMClient):
    """
    OpenAI-compatible chat completions.

    With base_url set, requests go to {base_url}/v1/chat/completions, which
    is how local model servers are reached.
    """

    provider = LLMProvider.OPENAI

    def _connect(self) -> Any:
        try:
            import openai
        except ImportError:
            logger.warning(
                "openai package not installed. "
                "Install with: pip install dragonbane-character-generator"
            )
            return None

        api_key = self.config.api_key or os.getenv("OPENAI_API_KEY")
        if not api_key and self.config.base_url:
            api_key = LOCAL_SERVER_API_KEY
        if not api_key:
            logger.warning("OPENAI_API_KEY not set and no server given; OpenAI enrichment is unavailable")
            return None

        kwargs: dict[str, Any] = {"api_key": api_key, "timeout": self.config.timeout}
        if self.config.base_url:
            kwargs["base_url"] = f"{self.config.base_url.rstrip('/')}/v1"
        return openai.OpenAI(**kwargs)

    def _send(self, messages: list[LLMMessage], system_prompt: Optional[str]) -> str:
        payload = [{"role": "system", "content": system_prompt}] if system_prompt else []
        payload.extend({"role": m.role.value, "content": m.content} for m in messages)
        response = self._client.chat.completions.create(
            model=self.config.model,
            messages=payload,
            max_tokens=self.config.max_tokens,
            temperature=self.config.temperature,
        )
        return response.choices[0].message.content or ""


class MockLLMClient(BaseLLMClient):
    """Replays canned responses in order, cycling; records every call."""

    provider = LLMProvider.MOCK

    def _connect(self) -> Any:
        self._responses: list[str] = []
        self._response_index = 0
        self.calls: list[list[LLMMessage]] = []
        return self

    def set_responses(self, responses: list[str]) -> None:
        self._responses = responses
        self._response_index = 0

    def _send(self, messages: list[LLMMessage], system_prompt: Optional[str]) -> str:
        self.calls.append(list(messages))
        if not self._responses:
            return "[Mock LLM response]"
        content = self._responses[self._response_index % len(self._responses)]
        self._response_index += 1
        return content


CLIENTS: dict[LLMProvider, type[BaseLLMClient]] = {
    LLMProvider.ANTHROPIC: AnthropicClient,
    LLMProvider.OPENAI: OpenAIClient,
    LLMProvider.MOCK: MockLLMClient,
}


class LLMManager:
    """
    Picks the client for the configured provider and turns "no usable
    client" into a marked fallback response instead of an exception.
    """

    def __init__(self, config: Optional[LLMConfig] = None):
        self.config = config or LLMConfig()
        self.client: BaseLLMClient = CLIENTS[self.config.provider](self.config)

    def is_available(self) -> bool:
        return self.client.is_available()

    def complete(
        self,
        messages: list[LLMMessage],
        system_prompt: Optional[str] = None,
    ) -> LLMResponse:
        """
        Generate an LLM completion.

        Returns:
            LLMResponse; errors is non-empty if no real completion was produced
        """
        if not self.is_available():
            return LLMResponse(
                content="[No LLM available]",
                model="none",
                provider=self.config.provider,
                errors=["no_provider_available"],
            )
        return self.client.complete(messages, system_prompt)
