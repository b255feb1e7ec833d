"""Resume retrieval for context scoring and model verdicts."""

from .index import CHUNK_SEPARATOR, ResumeIndex, ResumeRetriever, RetrievedChunk

__all__ = ["ResumeIndex", "ResumeRetriever", "RetrievedChunk", "CHUNK_SEPARATOR"]
