"""Report sinks for the Notify stage.

A sink receives the finished pipeline state and writes a report somewhere.
It returns nothing; the Notify stage adds no fields to the state.
"""

import json
import logging
import sys
from abc import ABC, abstractmethod
from typing import Optional, TextIO

from jobmatch.config.models import OutputFormat
from jobmatch.logging import get_logger

from .models import NotificationDeliveryError
from .payloads import build_report_context
from .templates import TemplateRenderer

logger = get_logger(__name__, component="notification")


class NotificationSink(ABC):
    """Destination for match reports."""

    @abstractmethod
    def emit(self, state) -> None:
        """Write the report for ``state``.

        Raises:
            NotificationError: If the report cannot be rendered or written
        """
        pass


class _StreamSink(NotificationSink):
    def __init__(self, stream: Optional[TextIO] = None, logger_instance: Optional[logging.Logger] = None):
        self._stream = stream
        self.logger = logger_instance or logger

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so that a replaced sys.stdout (pytest capture) is honoured
        return self._stream if self._stream is not None else sys.stdout

    def _write(self, text: str) -> None:
        try:
            self.stream.write(text)
            self.stream.flush()
        except OSError as e:
            self.logger.error(
                f"Failed to write report: {e}",
                extra={"event": "notification.write.error", "error_type": type(e).__name__},
            )
            raise NotificationDeliveryError(f"Failed to write report: {e}") from e


class ConsoleSink(_StreamSink):
    """Writes the plain-text report rendered from a Jinja2 template."""

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        renderer: Optional[TemplateRenderer] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        super().__init__(stream, logger_instance)
        self.renderer = renderer or TemplateRenderer()

    def emit(self, state) -> None:
        context = build_report_context(state)
        self._write(self.renderer.render(context))

        self.logger.info(
            "Match report written",
            extra={"event": "notification.report.written", "format": OutputFormat.TEXT.value},
        )


class JsonSink(_StreamSink):
    """Writes one JSON document with extracted, normalized and matchResult."""

    def emit(self, state) -> None:
        context = build_report_context(state)
        document = {
            "runId": context["run_id"],
            "generatedAt": context["generated_at"],
            "post": {"source": context["post_source"], "digest": context["post_digest"]},
            "extracted": context["extracted"],
            "normalized": context["normalized"],
            "matchResult": context["matchResult"],
            "extractionError": context["extraction_error"],
        }
        self._write(json.dumps(document, indent=2, ensure_ascii=False) + "\n")

        self.logger.info(
            "Match report written",
            extra={"event": "notification.report.written", "format": OutputFormat.JSON.value},
        )


def build_sink(output_format, stream: Optional[TextIO] = None) -> NotificationSink:
    """Return the sink for an output format ("text" or "json")."""
    if OutputFormat(output_format) == OutputFormat.JSON:
        return JsonSink(stream)
    return ConsoleSink(stream)
