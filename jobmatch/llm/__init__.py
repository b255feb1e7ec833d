"""Language model and embedding collaborators.

- LanguageModel / Embedder: the narrow interfaces the pipeline depends on
- OpenAIChatModel / OpenAIEmbedder: OpenAI SDK implementations
- parse_model_json: best-effort JSON recovery returning Parsed or Failed
- Similarity helpers for embedding comparisons
"""

from .base import Embedder, LanguageModel
from .exceptions import CollaboratorError, EmbeddingError, LanguageModelError
from .openai_client import OpenAIChatModel, OpenAIEmbedder, build_openai_client
from .parsing import Failed, Parsed, ParseOutcome, parse_model_json, repair_json_text
from .similarity import as_matrix, cosine_similarity, max_similarities

__all__ = [
    # Interfaces
    "LanguageModel",
    "Embedder",
    # OpenAI implementations
    "OpenAIChatModel",
    "OpenAIEmbedder",
    "build_openai_client",
    # Parsing
    "parse_model_json",
    "repair_json_text",
    "Parsed",
    "Failed",
    "ParseOutcome",
    # Similarity
    "cosine_similarity",
    "max_similarities",
    "as_matrix",
    # Exceptions
    "CollaboratorError",
    "LanguageModelError",
    "EmbeddingError",
]
