"""Match report delivery.

This module provides:
- NotificationSink: destination interface for the Notify stage
- ConsoleSink: plain-text report rendered with Jinja2
- JsonSink: one JSON document per run
"""

from .models import NotificationDeliveryError, NotificationError, NotificationTemplateError
from .payloads import build_report_context
from .sinks import ConsoleSink, JsonSink, NotificationSink, build_sink
from .templates import TemplateRenderer

__all__ = [
    "NotificationSink",
    "ConsoleSink",
    "JsonSink",
    "build_sink",
    "build_report_context",
    "TemplateRenderer",
    "NotificationError",
    "NotificationTemplateError",
    "NotificationDeliveryError",
]
