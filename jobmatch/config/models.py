"""Configuration schema models using Pydantic."""

from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from jobmatch.domain.models import JobCategory


class ScoringMode(str, Enum):
    """How required technologies are compared against the reference set."""

    EXACT = "exact"
    SIMILARITY = "similarity"
    CONTEXT = "context"


class VerdictStrategy(str, Enum):
    """Who writes the verdict reasons."""

    DETERMINISTIC = "deterministic"
    MODEL = "model"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class OutputFormat(str, Enum):
    """Report formats for the notification sink."""

    TEXT = "text"
    JSON = "json"


class TitleBucket(BaseModel):
    """A title category and the keywords that select it.

    Keywords are matched as case-sensitive substrings of the job title.
    """

    name: JobCategory = Field(..., description="Category assigned when a keyword matches")
    keywords: List[str] = Field(..., min_length=1, description="Substrings that select this bucket")

    model_config = {"frozen": True}

    @field_validator("name")
    @classmethod
    def reject_other(cls, v: JobCategory) -> JobCategory:
        """'Other' is the fallback category and cannot be selected by keywords."""
        if v == JobCategory.OTHER:
            raise ValueError("'Other' is the fallback category and cannot be used as a bucket")
        return v

    @field_validator("keywords")
    @classmethod
    def strip_keywords(cls, v: List[str]) -> List[str]:
        """Strip keywords and drop empty ones; case is preserved."""
        keywords = [k.strip() for k in v if k and k.strip()]
        if not keywords:
            raise ValueError("A title bucket needs at least one non-empty keyword")
        return keywords


class TechRule(BaseModel):
    """Maps any technology containing ``contains`` (lower-case) to ``canonical``."""

    contains: str = Field(..., min_length=1, description="Lower-case substring to look for")
    canonical: str = Field(..., min_length=1, description="Canonical technology name")

    model_config = {"frozen": True}

    @field_validator("contains")
    @classmethod
    def lower_contains(cls, v: str) -> str:
        """Rules are compared against lower-cased input, so store them lower-cased."""
        stripped = v.strip().lower()
        if not stripped:
            raise ValueError("contains cannot be empty or whitespace-only")
        return stripped

    @field_validator("canonical")
    @classmethod
    def strip_canonical(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("canonical cannot be empty or whitespace-only")
        return stripped


DEFAULT_TITLE_BUCKETS: List[TitleBucket] = [
    TitleBucket(name=JobCategory.FULL_STACK, keywords=["Full-Stack", "Fullstack", "Full Stack"]),
    TitleBucket(name=JobCategory.BACKEND, keywords=["Backend", "Back-End", "API"]),
    TitleBucket(name=JobCategory.FRONTEND, keywords=["Frontend", "Front-End", "UI"]),
    TitleBucket(name=JobCategory.SUPPORT, keywords=["Support", "Help Desk", "Technical Support"]),
    TitleBucket(name=JobCategory.DATA, keywords=["Data", "Scientist", "Engineer"]),
]

DEFAULT_TECH_RULES: List[TechRule] = [
    TechRule(contains="node", canonical="Node.js"),
    TechRule(contains="react", canonical="React"),
    TechRule(contains="javascript", canonical="JavaScript"),
    TechRule(contains="aws", canonical="AWS"),
]


class MatchingConfig(BaseModel):
    """Scoring and verdict settings."""

    threshold: int = Field(50, ge=1, le=100, description="Minimum match percentage for a match")
    scoring_mode: ScoringMode = Field(ScoringMode.EXACT, description="exact, similarity or context")
    similarity_threshold: float = Field(
        0.75, ge=0.0, le=1.0, description="Minimum cosine similarity in similarity mode"
    )
    verdict_strategy: VerdictStrategy = Field(
        VerdictStrategy.DETERMINISTIC, description="deterministic or model"
    )


class NormalizationConfig(BaseModel):
    """Title buckets and technology rewrite rules, both applied in order."""

    title_buckets: List[TitleBucket] = Field(default_factory=lambda: list(DEFAULT_TITLE_BUCKETS))
    tech_rules: List[TechRule] = Field(default_factory=lambda: list(DEFAULT_TECH_RULES))

    @field_validator("title_buckets")
    @classmethod
    def unique_bucket_names(cls, v: List[TitleBucket]) -> List[TitleBucket]:
        """A category may only be declared once."""
        seen = set()
        for bucket in v:
            if bucket.name in seen:
                raise ValueError(f"Duplicate title bucket: {bucket.name.value}")
            seen.add(bucket.name)
        return v


class LLMConfig(BaseModel):
    """Language model and embedding settings."""

    chat_model: str = Field("gpt-4o-mini", min_length=1, description="Chat completion model")
    embedding_model: str = Field(
        "text-embedding-3-small", min_length=1, description="Embedding model"
    )
    temperature: Optional[float] = Field(
        0.0, ge=0.0, le=2.0, description="Sampling temperature; null for models that reject it"
    )
    request_timeout: float = Field(60.0, gt=0, le=600, description="Per-request timeout (seconds)")
    embedding_batch_size: int = Field(100, ge=1, le=2048, description="Inputs per embedding call")


class ResumeConfig(BaseModel):
    """Candidate resume used for retrieval-augmented matching."""

    text: Optional[str] = Field(None, description="Resume text inline")
    path: Optional[Path] = Field(None, description="Path to a UTF-8 resume file")
    top_k: int = Field(4, ge=1, le=50, description="Resume chunks retrieved per post")

    @model_validator(mode="after")
    def text_or_path(self):
        if self.text is not None and self.path is not None:
            raise ValueError("Specify only one of resume.text or resume.path")
        if self.text is not None and not self.text.strip():
            self.text = None
        return self

    @property
    def configured(self) -> bool:
        return self.text is not None or self.path is not None

    def load_text(self) -> Optional[str]:
        """Return the resume text, reading the file when a path is configured."""
        if self.text is not None:
            return self.text
        if self.path is not None:
            return self.path.read_text(encoding="utf-8")
        return None


class PostConfig(BaseModel):
    """Where job posts come from when none is given on the command line."""

    default_text: Optional[str] = Field(None, description="Overrides the built-in sample post")
    http_timeout: int = Field(30, ge=5, le=300, description="Timeout for fetching post URLs")
    user_agent: str = Field("JobMatch/1.0", min_length=1)

    @field_validator("user_agent")
    @classmethod
    def strip_user_agent(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("user_agent cannot be empty")
        return stripped


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(LogFormat.KEY_VALUE, description="Log output format")

    model_config = {"use_enum_values": True}


class OutputConfig(BaseModel):
    """Report output settings."""

    format: OutputFormat = Field(OutputFormat.TEXT, description="text or json")

    model_config = {"use_enum_values": True}


class AppConfig(BaseModel):
    """Root configuration object for the job match pipeline."""

    reference_technologies: List[str] = Field(
        default_factory=list, description="Canonical names of the candidate's known technologies"
    )
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    normalization: NormalizationConfig = Field(default_factory=NormalizationConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    resume: ResumeConfig = Field(default_factory=ResumeConfig)
    post: PostConfig = Field(default_factory=PostConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @field_validator("reference_technologies")
    @classmethod
    def dedupe_references(cls, v: List[str]) -> List[str]:
        """Strip names, drop blanks and keep the first occurrence of duplicates."""
        seen = set()
        cleaned = []
        for name in v:
            stripped = name.strip()
            if stripped and stripped not in seen:
                seen.add(stripped)
                cleaned.append(stripped)
        return cleaned

    @model_validator(mode="after")
    def context_mode_needs_resume(self):
        if self.matching.scoring_mode == ScoringMode.CONTEXT and not self.resume.configured:
            raise ValueError(
                "scoring_mode 'context' requires a resume (resume.text or resume.path)"
            )
        return self
