"""Completion-service errors."""


class UpstreamUnavailableError(RuntimeError):
    """The completion service could not be reached or refused the request.

    Distinct from a parse fallback: a reply that arrived but is not valid JSON
    still yields a suggestion, this error means there is no reply at all.
    """
