"""Domain-Oriented Observability for the blog application layer.

Probes for application service operations following Domain-Oriented Observability patterns.
"""

from blog.application.observability.post_service_probe import (
    DefaultPostServiceProbe,
    PostServiceProbe,
)
from blog.application.observability.user_service_probe import (
    DefaultUserServiceProbe,
    UserServiceProbe,
)

__all__ = [
    "PostServiceProbe",
    "DefaultPostServiceProbe",
    "UserServiceProbe",
    "DefaultUserServiceProbe",
]
