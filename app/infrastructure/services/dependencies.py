"""
Type aliases for FastAPI dependency injection.

Provides annotated type hints for common infrastructure dependencies.
"""

from typing import Annotated
from fastapi import Depends
from infrastructure.configuration import Settings
from infrastructure.clients.aws import AWSClients
from infrastructure.services.providers import get_settings, get_aws_clients

# Settings dependency
SettingsDep = Annotated[Settings, Depends(get_settings)]

# AWS clients facade dependency
# Usage: aws.dynamodb.get_item(...)
AWSClientsDep = Annotated[AWSClients, Depends(get_aws_clients)]

__all__ = [
    "SettingsDep",
    "AWSClientsDep",
]
