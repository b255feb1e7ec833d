"""Root of the job match exception hierarchy."""


class JobMatchError(Exception):
    """Base exception for every error raised by the job match pipeline.

    Package-specific hierarchies (configuration, post sources, language model,
    notifications, pipeline) all derive from this class so callers can catch
    a single type at the outermost boundary.
    """

    pass
