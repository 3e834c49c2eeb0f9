"""Request-level dependency providers for the blog bounded context."""

from infrastructure.observability import DefaultRequestProbe, RequestProbe


def get_request_probe() -> RequestProbe:
    """Get RequestProbe instance.

    Returns:
        DefaultRequestProbe instance used by routes to record unexpected errors
    """
    return DefaultRequestProbe()
