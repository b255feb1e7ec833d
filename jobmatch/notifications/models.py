"""Exceptions for report delivery."""

from jobmatch.exceptions import JobMatchError


class NotificationError(JobMatchError):
    """Base exception for notification-related errors."""

    pass


class NotificationTemplateError(NotificationError):
    """Raised when template rendering fails due to a missing variable or a broken template."""

    pass


class NotificationDeliveryError(NotificationError):
    """Raised when the report cannot be written to its destination."""

    pass
