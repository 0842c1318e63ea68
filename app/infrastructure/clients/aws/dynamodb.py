"""DynamoDB client for AWS operations.

Provides access to the DynamoDB operations used by the translation store
(get_item, scan, transact_write_items) with consistent error handling and
OperationResult return types.
"""

import uuid
from typing import Any, Dict, List

import structlog

from infrastructure.clients.aws.executor import execute_aws_api_call
from infrastructure.clients.aws.session_provider import SessionProvider
from infrastructure.operations.result import OperationResult

logger = structlog.get_logger()


class DynamoDBClient:
    """Client for DynamoDB operations.

    All methods return OperationResult for consistent error handling and
    downstream processing.

    Args:
        session_provider: SessionProvider instance for credential/config management
    """

    def __init__(self, session_provider: SessionProvider) -> None:
        self._session_provider = session_provider
        self._service_name = "dynamodb"
        self._logger = logger.bind(component="dynamodb_client")

    def get_item(
        self,
        table_name: str,
        Key: Dict[str, Any],
        **kwargs,
    ) -> OperationResult:
        """Get an item from DynamoDB.

        Args:
            table_name: Name of the DynamoDB table
            Key: Primary key of the item (e.g., {"pk": {"S": "TAG#123"}})
            **kwargs: Additional DynamoDB get_item parameters (ConsistentRead, ...)

        Returns:
            OperationResult whose data is the raw response ({"Item": ...} when found)
        """
        return execute_aws_api_call(
            self._service_name,
            "get_item",
            TableName=table_name,
            Key=Key,
            **self._session_provider.build_client_kwargs(),
            **kwargs,
        )

    def scan(
        self,
        table_name: str,
        **kwargs,
    ) -> OperationResult:
        """Scan all items from a DynamoDB table, following pagination.

        Args:
            table_name: Name of the DynamoDB table
            **kwargs: Additional DynamoDB scan parameters (FilterExpression, ...)

        Returns:
            OperationResult whose data is the list of matching items
        """
        return execute_aws_api_call(
            self._service_name,
            "scan",
            keys=["Items"],
            force_paginate=True,
            TableName=table_name,
            **self._session_provider.build_client_kwargs(),
            **kwargs,
        )

    def transact_write_items(
        self,
        TransactItems: List[Dict[str, Any]],
        **kwargs,
    ) -> OperationResult:
        """Apply several conditional writes as one all-or-nothing transaction.

        Args:
            TransactItems: Put/Update/Delete/ConditionCheck entries
            **kwargs: Additional transact_write_items parameters; a
                ClientRequestToken is generated when none is given

        Returns:
            OperationResult; a failed condition yields error_code
            "TransactionCanceledException" with positional cancellation reasons
            in ``data["cancellation_reasons"]``
        """
        # Same token on every attempt; DynamoDB applies a retried transaction once
        kwargs.setdefault("ClientRequestToken", str(uuid.uuid4()))
        return execute_aws_api_call(
            self._service_name,
            "transact_write_items",
            TransactItems=TransactItems,
            **self._session_provider.build_client_kwargs(),
            **kwargs,
        )

    def healthcheck(self) -> OperationResult:
        """Lightweight health check performing a cheap `list_tables` call."""
        return execute_aws_api_call(
            self._service_name,
            "list_tables",
            max_retries=0,
            Limit=1,
            **self._session_provider.build_client_kwargs(),
        )
