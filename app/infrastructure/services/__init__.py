"""
Dependency injection services.

Provides type aliases and provider functions for FastAPI dependency injection.
"""

from infrastructure.services.dependencies import (
    SettingsDep,
    AWSClientsDep,
)
from infrastructure.services.providers import (
    get_settings,
    get_aws_clients,
)

__all__ = [
    "SettingsDep",
    "AWSClientsDep",
    "get_settings",
    "get_aws_clients",
]
