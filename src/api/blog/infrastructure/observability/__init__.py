"""Domain-Oriented Observability for blog infrastructure.

Probes for repository operations following Domain-Oriented Observability patterns.
"""

from blog.infrastructure.observability.repository_probe import (
    DefaultPostRepositoryProbe,
    DefaultUserRepositoryProbe,
    PostRepositoryProbe,
    UserRepositoryProbe,
)

__all__ = [
    "PostRepositoryProbe",
    "DefaultPostRepositoryProbe",
    "UserRepositoryProbe",
    "DefaultUserRepositoryProbe",
]
