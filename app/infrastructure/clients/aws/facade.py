"""AWS clients facade.

Composes per-service clients behind one object built from settings so that
callers get attribute-based access (``aws.dynamodb.get_item(...)``).
"""

import structlog

from infrastructure.clients.aws.dynamodb import DynamoDBClient
from infrastructure.clients.aws.session_provider import SessionProvider
from infrastructure.configuration.integrations.aws import AwsSettings

logger = structlog.get_logger()


class AWSClients:
    """Facade for the AWS service clients used by the application.

    Args:
        aws_settings: AWS configuration from settings.aws

    Usage:
        aws = AWSClients(settings.aws)
        result = aws.dynamodb.get_item("translations", {"pk": {"S": "TAG#1"}})
        if result.is_success:
            return result.data
    """

    def __init__(self, aws_settings: AwsSettings) -> None:
        self._session_provider = SessionProvider(
            region=aws_settings.AWS_REGION,
            endpoint_url=aws_settings.ENDPOINT_URL,
        )
        self.dynamodb: DynamoDBClient = DynamoDBClient(self._session_provider)
        logger.debug(
            "aws_clients_initialized",
            region=aws_settings.AWS_REGION,
            endpoint_url=aws_settings.ENDPOINT_URL,
        )
