"""Fetch a job post from a URL."""

import logging

import requests
from pydantic import ValidationError

from jobmatch.domain.models import JobPost
from jobmatch.logging import get_logger
from jobmatch.utils.text import clean_html

from .base import PostSource
from .exceptions import (
    PostSourceHTTPError,
    PostSourceResponseError,
    PostSourceTimeoutError,
)

logger = get_logger(__name__, component="source")


class HttpPostSource(PostSource):
    """Downloads a job post page and reduces it to plain text.

    HTML responses are stripped of markup; any other text content type is
    used as-is.

    Attributes:
        url: Page to fetch
        timeout: HTTP request timeout in seconds
        user_agent: User-Agent header for the request
    """

    def __init__(self, url: str, timeout: int = 30, user_agent: str = "JobMatch/1.0") -> None:
        if not url.startswith(("http://", "https://")):
            raise ValueError(f"Post URL must start with http:// or https://, got: {url}")

        self.url = url
        self.timeout = timeout
        self.user_agent = user_agent

        self._session = requests.Session()
        self._session.headers.update({"User-Agent": self.user_agent})

    @property
    def label(self) -> str:
        return self.url

    def fetch(self) -> JobPost:
        """Fetch and clean the post.

        Raises:
            PostSourceHTTPError: On 4xx/5xx status or connection failure
            PostSourceTimeoutError: On request timeout
            PostSourceResponseError: If the page has no text
        """
        body, content_type = self._get()

        text = clean_html(body) if "html" in content_type else body.strip()
        try:
            post = JobPost(text=text, source=self.label)
        except ValidationError as e:
            logger.error(
                f"No text found at {self.url}",
                extra={"event": "source.fetch.error", "error_type": "EmptyResponse", "url": self.url},
            )
            raise PostSourceResponseError(f"No post text found at {self.url}") from e

        logger.info(
            f"Fetched post from {self.url} ({len(post.text)} chars)",
            extra={"event": "source.fetch.succeeded", "url": self.url, "chars": len(post.text)},
        )
        return post

    def _get(self) -> tuple:
        try:
            logger.debug(
                f"HTTP GET request to {self.url}",
                extra={"event": "source.fetch.request", "url": self.url, "timeout": self.timeout},
            )
            response = self._session.get(self.url, timeout=self.timeout)

            if response.status_code >= 400:
                is_retryable = response.status_code >= 500
                logger.log(
                    logging.WARNING if is_retryable else logging.ERROR,
                    f"HTTP {response.status_code} error from {self.url}",
                    extra={
                        "event": "source.fetch.error",
                        "status_code": response.status_code,
                        "url": self.url,
                        "retryable": is_retryable,
                    },
                )
                raise PostSourceHTTPError(
                    f"HTTP {response.status_code}: {response.reason}",
                    status_code=response.status_code,
                    url=self.url,
                )

            return response.text, response.headers.get("Content-Type", "").lower()

        except requests.exceptions.Timeout as e:
            logger.warning(
                f"Request to {self.url} timed out after {self.timeout} seconds",
                extra={"event": "source.fetch.error", "error_type": "Timeout", "url": self.url},
            )
            raise PostSourceTimeoutError(
                f"Request to {self.url} timed out after {self.timeout} seconds",
                url=self.url,
            ) from e
        except requests.exceptions.RequestException as e:
            logger.error(
                f"Request to {self.url} failed: {e}",
                extra={"event": "source.fetch.error", "error_type": type(e).__name__, "url": self.url},
            )
            raise PostSourceHTTPError(
                f"Request to {self.url} failed: {e}",
                status_code=0,
                url=self.url,
            ) from e
