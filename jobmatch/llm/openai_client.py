"""OpenAI-backed language model and embedding collaborators."""

from typing import List, Optional, Sequence

from openai import OpenAI, OpenAIError

from jobmatch.config.environment import EnvironmentConfig
from jobmatch.config.models import LLMConfig
from jobmatch.logging import get_logger

from .exceptions import EmbeddingError, LanguageModelError

logger = get_logger(__name__, component="llm")


def build_openai_client(env_config: EnvironmentConfig, llm_config: LLMConfig) -> OpenAI:
    """Create the SDK client shared by the chat model and the embedder.

    SDK-level retries are disabled: a failed call fails the run and the caller
    decides whether to run again.
    """
    return OpenAI(
        api_key=env_config.openai_api_key,
        base_url=env_config.openai_base_url,
        timeout=llm_config.request_timeout,
        max_retries=0,
    )


class OpenAIChatModel:
    """Language model collaborator backed by the chat completions API.

    Attributes:
        model: Chat model name
        temperature: Sampling temperature, or None to omit it from requests
    """

    def __init__(self, client: OpenAI, model: str = "gpt-4o-mini", temperature: Optional[float] = 0.0):
        self.client = client
        self.model = model
        self.temperature = temperature

    @classmethod
    def from_config(cls, client: OpenAI, llm_config: LLMConfig) -> "OpenAIChatModel":
        return cls(client, model=llm_config.chat_model, temperature=llm_config.temperature)

    def complete(self, prompt: str) -> str:
        """Send ``prompt`` as a single user message and return the reply text.

        Raises:
            LanguageModelError: On any SDK error (connection, status, timeout)
        """
        request = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
        }
        if self.temperature is not None:
            request["temperature"] = self.temperature

        logger.debug(
            "Chat completion request",
            extra={
                "event": "llm.complete.request",
                "model": self.model,
                "prompt_chars": len(prompt),
            },
        )

        try:
            response = self.client.chat.completions.create(**request)
        except OpenAIError as e:
            logger.error(
                f"Chat completion failed: {e}",
                extra={
                    "event": "llm.complete.error",
                    "model": self.model,
                    "error_type": type(e).__name__,
                },
            )
            raise LanguageModelError(f"Chat completion with {self.model} failed: {e}", model=self.model) from e

        if not response.choices:
            logger.warning(
                "Chat completion returned no choices",
                extra={"event": "llm.complete.empty", "model": self.model},
            )
            return ""

        content = response.choices[0].message.content or ""

        logger.debug(
            "Chat completion succeeded",
            extra={
                "event": "llm.complete.succeeded",
                "model": self.model,
                "response_chars": len(content),
            },
        )
        return content


class OpenAIEmbedder:
    """Embedding collaborator backed by the embeddings API.

    Inputs are sent in batches of ``batch_size``; vectors are returned in
    input order regardless of how the API orders its response items.
    """

    def __init__(self, client: OpenAI, model: str = "text-embedding-3-small", batch_size: int = 100):
        if batch_size < 1:
            raise ValueError(f"batch_size must be positive, got: {batch_size}")
        self.client = client
        self.model = model
        self.batch_size = batch_size

    @classmethod
    def from_config(cls, client: OpenAI, llm_config: LLMConfig) -> "OpenAIEmbedder":
        return cls(client, model=llm_config.embedding_model, batch_size=llm_config.embedding_batch_size)

    def embed(self, texts: Sequence[str]) -> List[List[float]]:
        """Embed ``texts``, one vector per input.

        Raises:
            EmbeddingError: On SDK errors or a response of the wrong size
        """
        vectors: List[List[float]] = []

        for start in range(0, len(texts), self.batch_size):
            batch = list(texts[start : start + self.batch_size])
            try:
                response = self.client.embeddings.create(model=self.model, input=batch)
            except OpenAIError as e:
                logger.error(
                    f"Embedding request failed: {e}",
                    extra={
                        "event": "llm.embed.error",
                        "model": self.model,
                        "batch_size": len(batch),
                        "error_type": type(e).__name__,
                    },
                )
                raise EmbeddingError(f"Embedding with {self.model} failed: {e}", model=self.model) from e

            if len(response.data) != len(batch):
                raise EmbeddingError(
                    f"Expected {len(batch)} embeddings, got {len(response.data)}",
                    model=self.model,
                )

            ordered = sorted(response.data, key=lambda item: item.index)
            vectors.extend(list(item.embedding) for item in ordered)

        logger.debug(
            "Embedded texts",
            extra={"event": "llm.embed.succeeded", "model": self.model, "count": len(vectors)},
        )
        return vectors
