"""Domain models shared across pipeline stages."""

from .models import ExtractedFields, JobCategory, JobPost, NormalizedFields

__all__ = ["ExtractedFields", "JobCategory", "JobPost", "NormalizedFields"]
