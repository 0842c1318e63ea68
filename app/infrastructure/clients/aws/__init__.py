"""Infrastructure AWS clients public API.

The main facade is AWSClients, which composes per-service clients and exposes
them as attributes:

    from infrastructure.services import get_aws_clients

    aws = get_aws_clients()
    result = aws.dynamodb.get_item("translations", {"pk": {"S": "TAG#1"}})
    if result.is_success:
        return result.data
"""

from infrastructure.clients.aws.dynamodb import DynamoDBClient
from infrastructure.clients.aws.facade import AWSClients
from infrastructure.clients.aws.session_provider import SessionProvider

__all__ = [
    "AWSClients",
    "SessionProvider",
    "DynamoDBClient",
]
