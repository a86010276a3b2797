import logging
import os
from openai import AsyncOpenAI
from imagechat.config import get_settings

logger = logging.getLogger(__name__)


def _make_openai_client() -> AsyncOpenAI:
    """Create an AsyncOpenAI client with optional LangSmith tracing."""
    settings = get_settings()
    client = AsyncOpenAI(
        api_key=settings.llm_api_key,
        base_url=settings.llm_api_base,
    )

    # Wrap with LangSmith tracing if configured
    if settings.langsmith_api_key:
        try:
            from langsmith.wrappers import wrap_openai
            os.environ.setdefault("LANGCHAIN_TRACING_V2", "true")
            os.environ.setdefault("LANGCHAIN_API_KEY", settings.langsmith_api_key)
            os.environ.setdefault("LANGCHAIN_ENDPOINT", settings.langsmith_endpoint)
            os.environ.setdefault("LANGCHAIN_PROJECT", settings.langsmith_project)
            client = wrap_openai(client)
        except ImportError:
            logger.warning("LANGSMITH_API_KEY is set but langsmith is not installed; tracing disabled")

    return client


class LLMService:
    """
    Chat Completions client for any OpenAI-compatible API.
    Works with OpenAI, OpenRouter, Ollama, LM Studio, etc.
    Automatically traced via LangSmith when configured.
    """

    def __init__(self, client: AsyncOpenAI | None = None):
        settings = get_settings()
        self._client = client
        self.model = settings.llm_model
        self.max_tokens = settings.llm_max_tokens

    @property
    def client(self) -> AsyncOpenAI:
        # Built on first use so a construction failure is raised inside the
        # request handler and reported like any other model error.
        if self._client is None:
            self._client = _make_openai_client()
        return self._client

    async def chat_completion(
        self,
        messages: list[dict],
        system_prompt: str | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """
        Get a non-streaming chat completion response.

        Returns the trimmed content of the first choice, or an empty string
        when the model returned no content.

        Args:
            messages: List of message dicts with 'role' and 'content'
            system_prompt: Optional system prompt to prepend
            max_tokens: Optional max tokens limit, defaults to the configured cap
        """
        chat_messages = []

        if system_prompt:
            chat_messages.append({"role": "system", "content": system_prompt})

        chat_messages.extend(messages)

        kwargs = {
            "model": self.model,
            "messages": chat_messages,
        }
        max_tokens = max_tokens or self.max_tokens
        if max_tokens:
            kwargs["max_tokens"] = max_tokens

        response = await self.client.chat.completions.create(**kwargs)
        if not response.choices:
            return ""
        return (response.choices[0].message.content or "").strip()


def get_llm_service() -> LLMService:
    # One client per request; nothing is shared across requests.
    return LLMService()
