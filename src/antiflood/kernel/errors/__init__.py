"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    AntiFloodError
    ├── DomainError           (domain.py)
    │   ├── ValidationError
    │   └── ConflictError
    └── ApplicationError      (application.py)
        ├── InvalidArgumentError
        └── ConfigError       (antiflood.config.errors)
"""

from antiflood.kernel.errors.application import ApplicationError, InvalidArgumentError
from antiflood.kernel.errors.base import AntiFloodError
from antiflood.kernel.errors.domain import ConflictError, DomainError, ValidationError

__all__ = [
    "AntiFloodError",
    "ApplicationError",
    "ConflictError",
    "DomainError",
    "InvalidArgumentError",
    "ValidationError",
]
