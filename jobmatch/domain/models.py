"""Core domain models for job posts and the fields extracted from them.

This module defines the records that flow between pipeline stages:
- JobPost: the raw posting text and where it came from
- ExtractedFields: loosely-typed fields produced by the language model
- JobCategory: the fixed set of title buckets
- NormalizedFields: canonical technologies plus the title category
"""

import hashlib
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, Field, field_validator


class JobCategory(str, Enum):
    """Title categories a job post can be classified into."""

    FULL_STACK = "Full-Stack"
    BACKEND = "Backend"
    FRONTEND = "Frontend"
    SUPPORT = "Support"
    DATA = "Data"
    OTHER = "Other"


class JobPost(BaseModel):
    """A job posting as fetched at the start of a pipeline run.

    The text is never modified after the Fetch stage; later stages only read it.
    """

    text: str = Field(..., description="Full job post text")
    source: str = Field("text", description="Where the post came from (default, text, file:..., URL)")

    model_config = {"frozen": True}

    @field_validator("text")
    @classmethod
    def strip_text(cls, v: str) -> str:
        """Strip surrounding whitespace; reject empty posts."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Job post text cannot be empty or whitespace-only")
        return stripped

    @property
    def digest(self) -> str:
        """Short SHA-256 digest of the post text, used to correlate log lines."""
        return hashlib.sha256(self.text.encode("utf-8")).hexdigest()[:12]


# Accepted spellings for each extracted key, compared case-insensitively
_FIELD_ALIASES: Dict[str, tuple] = {
    "title": ("title", "jobtitle", "job_title"),
    "technologies": ("technologies", "techs", "tech_stack", "techstack"),
    "seniority": ("seniority", "level"),
    "remote": ("remote", "is_remote"),
    "salary_range": ("salaryrange", "salary_range", "salary"),
}

_TRUE_STRINGS = {"true", "yes", "y", "1", "remote"}
_FALSE_STRINGS = {"false", "no", "n", "0", "onsite", "on-site"}


@dataclass(frozen=True)
class ExtractedFields:
    """Fields the language model extracted from a job post.

    Every field is optional. Downstream stages substitute neutral defaults
    for unset fields, so an empty record (the result of a failed parse) is
    always safe to normalize.

    Attributes:
        title: Job title as written in the post
        technologies: Raw technology names in post order
        seniority: Seniority label (e.g. "Senior")
        remote: Whether the role is remote
        salary_range: Salary range as free text
    """

    title: Optional[str] = None
    technologies: Optional[List[str]] = None
    seniority: Optional[str] = None
    remote: Optional[bool] = None
    salary_range: Optional[str] = None

    @classmethod
    def empty(cls) -> "ExtractedFields":
        """Return a record with every field unset."""
        return cls()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ExtractedFields":
        """Build from a parsed model response.

        Keys are matched case-insensitively against known aliases
        (``Technologies``, ``SalaryRange``, ``salary_range``...). Values of an
        unexpected type are dropped rather than coerced into nonsense, and
        technology names are stripped with blank ones dropped.

        Args:
            data: Parsed JSON object

        Returns:
            ExtractedFields with recognized keys populated
        """
        lowered = {str(k).lower(): v for k, v in data.items()}

        def lookup(name: str) -> Any:
            for alias in _FIELD_ALIASES[name]:
                if alias in lowered:
                    return lowered[alias]
            return None

        title = lookup("title")
        technologies = lookup("technologies")
        seniority = lookup("seniority")
        salary_range = lookup("salary_range")

        if isinstance(technologies, str):
            technologies = [part.strip() for part in technologies.split(",") if part.strip()]
        elif isinstance(technologies, list):
            technologies = [t.strip() for t in technologies if isinstance(t, str) and t.strip()]
        else:
            technologies = None

        if isinstance(salary_range, (int, float)) and not isinstance(salary_range, bool):
            salary_range = str(salary_range)

        return cls(
            title=title if isinstance(title, str) else None,
            technologies=technologies,
            seniority=seniority if isinstance(seniority, str) else None,
            remote=_coerce_remote(lookup("remote")),
            salary_range=salary_range if isinstance(salary_range, str) else None,
        )

    def is_empty(self) -> bool:
        """True when no field is set."""
        return self == ExtractedFields()

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the key names used in reports."""
        return {
            "title": self.title,
            "technologies": list(self.technologies) if self.technologies is not None else None,
            "seniority": self.seniority,
            "remote": self.remote,
            "salaryRange": self.salary_range,
        }


def _coerce_remote(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    return None


@dataclass(frozen=True)
class NormalizedFields:
    """Extracted fields mapped onto canonical names and a fixed category.

    Attributes:
        title: Job title ("" when the model gave none)
        techs: Canonical technology names, post order, duplicates kept
        category: Title bucket, always a JobCategory
        seniority: Passed through from extraction
        remote: Passed through from extraction
        salary_range: Passed through from extraction
    """

    title: str = ""
    techs: Tuple[str, ...] = ()
    category: JobCategory = JobCategory.OTHER
    seniority: Optional[str] = None
    remote: Optional[bool] = None
    salary_range: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "techs", tuple(self.techs))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the key names used in reports and prompts."""
        return {
            "title": self.title,
            "techs": list(self.techs),
            "category": self.category.value,
            "seniority": self.seniority,
            "remote": self.remote,
            "salaryRange": self.salary_range,
        }
