import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from infrastructure.clients.aws import executor as aws_client
from infrastructure.operations.status import OperationStatus


@pytest.mark.unit
class TestExecutor:
    def test_calculate_retry_delay(self):
        assert aws_client._calculate_retry_delay(0) == pytest.approx(0.5)
        assert aws_client._calculate_retry_delay(1) == pytest.approx(1.0)
        assert aws_client._calculate_retry_delay(
            3, backoff_factor=1.0
        ) == pytest.approx(8.0)

    def test_map_client_error_throttling_returns_transient(self):
        response = {
            "Error": {"Code": "ThrottlingException", "Message": "throttle"},
            "RetryAfter": "2",
        }
        e = ClientError(response, operation_name="Query")
        res = aws_client._map_client_error(e, "dynamodb", "query")
        assert res.status == OperationStatus.TRANSIENT_ERROR
        assert res.retry_after == 2

    def test_map_client_error_provisioned_throughput_is_transient(self):
        response = {
            "Error": {
                "Code": "ProvisionedThroughputExceededException",
                "Message": "slow down",
            }
        }
        e = ClientError(response, operation_name="GetItem")
        res = aws_client._map_client_error(e, "dynamodb", "get_item")
        assert res.status == OperationStatus.TRANSIENT_ERROR

    def test_map_client_error_unauthorized(self):
        response = {"Error": {"Code": "AccessDeniedException", "Message": "denied"}}
        e = ClientError(response, operation_name="GetItem")
        res = aws_client._map_client_error(e, "dynamodb", "get_item")
        assert res.status == OperationStatus.UNAUTHORIZED

    def test_map_client_error_resource_not_found(self):
        response = {"Error": {"Code": "ResourceNotFoundException", "Message": "no"}}
        e = ClientError(response, operation_name="Scan")
        res = aws_client._map_client_error(e, "dynamodb", "scan")
        assert res.status == OperationStatus.NOT_FOUND

    def test_map_client_error_transaction_canceled_keeps_reasons(self):
        response = {
            "Error": {"Code": "TransactionCanceledException", "Message": "canceled"},
            "CancellationReasons": [
                {"Code": "None"},
                {"Code": "ConditionalCheckFailed", "Message": "failed"},
            ],
        }
        e = ClientError(response, operation_name="TransactWriteItems")
        res = aws_client._map_client_error(e, "dynamodb", "transact_write_items")
        assert res.status == OperationStatus.PERMANENT_ERROR
        assert res.error_code == "TransactionCanceledException"
        assert res.data == {"cancellation_reasons": ["None", "ConditionalCheckFailed"]}

    def test_map_client_error_other_is_permanent(self):
        response = {"Error": {"Code": "ValidationException", "Message": "bad"}}
        e = ClientError(response, operation_name="PutItem")
        res = aws_client._map_client_error(e, "dynamodb", "put_item")
        assert res.status == OperationStatus.PERMANENT_ERROR
        assert res.error_code == "ValidationException"

    def test_execute_aws_api_call_success(self, monkeypatch, make_fake_client):
        def get_boto3_client(
            service_name, session_config=None, client_config=None, role_arn=None
        ):
            return make_fake_client(api_responses={"describe_table": {"ok": True}})

        monkeypatch.setattr(aws_client, "get_boto3_client", get_boto3_client)

        res = aws_client.execute_aws_api_call("dynamodb", "describe_table")
        assert res.is_success
        assert res.data == {"ok": True}

    def test_execute_aws_api_call_retries_throttling(
        self, monkeypatch, make_fake_client
    ):
        calls = {"count": 0}

        def flaky(**kwargs):
            calls["count"] += 1
            if calls["count"] < 3:
                response = {
                    "Error": {"Code": "ThrottlingException", "Message": "throttle"}
                }
                raise ClientError(response, operation_name="GetItem")
            return {"Item": {}}

        def get_boto3_client(
            service_name, session_config=None, client_config=None, role_arn=None
        ):
            return make_fake_client(api_responses={"get_item": flaky})

        monkeypatch.setattr(aws_client, "get_boto3_client", get_boto3_client)
        res = aws_client.execute_aws_api_call(
            "dynamodb", "get_item", max_retries=3, backoff_factor=0
        )
        assert res.is_success
        assert calls["count"] == 3

    def test_execute_aws_api_call_throttling_exhausted(
        self, monkeypatch, make_fake_client
    ):
        def always_throttled(**kwargs):
            response = {"Error": {"Code": "ThrottlingException", "Message": "throttle"}}
            raise ClientError(response, operation_name="GetItem")

        def get_boto3_client(
            service_name, session_config=None, client_config=None, role_arn=None
        ):
            return make_fake_client(api_responses={"get_item": always_throttled})

        monkeypatch.setattr(aws_client, "get_boto3_client", get_boto3_client)
        res = aws_client.execute_aws_api_call(
            "dynamodb", "get_item", max_retries=2, backoff_factor=0
        )
        assert res.status == OperationStatus.TRANSIENT_ERROR

    def test_execute_aws_api_call_does_not_retry_condition_failures(
        self, monkeypatch, make_fake_client
    ):
        calls = {"count": 0}

        def canceled(**kwargs):
            calls["count"] += 1
            response = {
                "Error": {"Code": "TransactionCanceledException", "Message": "no"},
                "CancellationReasons": [{"Code": "ConditionalCheckFailed"}],
            }
            raise ClientError(response, operation_name="TransactWriteItems")

        def get_boto3_client(
            service_name, session_config=None, client_config=None, role_arn=None
        ):
            return make_fake_client(api_responses={"transact_write_items": canceled})

        monkeypatch.setattr(aws_client, "get_boto3_client", get_boto3_client)
        res = aws_client.execute_aws_api_call(
            "dynamodb", "transact_write_items", max_retries=3, backoff_factor=0
        )
        assert not res.is_success
        assert res.error_code == "TransactionCanceledException"
        assert calls["count"] == 1

    def test_execute_aws_api_call_connection_error_is_transient(
        self, monkeypatch, make_fake_client
    ):
        def unreachable(**kwargs):
            raise EndpointConnectionError(endpoint_url="http://localhost:4566")

        def get_boto3_client(
            service_name, session_config=None, client_config=None, role_arn=None
        ):
            return make_fake_client(api_responses={"scan": unreachable})

        monkeypatch.setattr(aws_client, "get_boto3_client", get_boto3_client)
        res = aws_client.execute_aws_api_call(
            "dynamodb", "scan", max_retries=1, backoff_factor=0
        )
        assert res.status == OperationStatus.TRANSIENT_ERROR

    def test_force_paginate_with_keys(self, monkeypatch, make_fake_client):
        pages = [{"Items": [1, 2], "Count": 2}, {"Items": [3], "Count": 1}]

        def get_boto3_client(
            service_name, session_config=None, client_config=None, role_arn=None
        ):
            return make_fake_client(paginated_pages=pages)

        monkeypatch.setattr(aws_client, "get_boto3_client", get_boto3_client)

        result = aws_client._call_api_once(
            service_name="dynamodb",
            method="scan",
            keys=["Items"],
            role_arn=None,
            session_config=None,
            client_config=None,
            force_paginate=True,
            kwargs={},
        )

        assert result == [1, 2, 3]

    def test_force_paginate_without_keys(self, monkeypatch, make_fake_client):
        pages = [
            {"Items": [{"id": 1}], "Count": 1, "ResponseMetadata": {}},
            {"Items": [{"id": 2}], "Count": 1},
        ]

        def get_boto3_client(
            service_name, session_config=None, client_config=None, role_arn=None
        ):
            return make_fake_client(paginated_pages=pages)

        monkeypatch.setattr(aws_client, "get_boto3_client", get_boto3_client)

        result = aws_client._call_api_once(
            service_name="dynamodb",
            method="scan",
            keys=None,
            role_arn=None,
            session_config=None,
            client_config=None,
            force_paginate=True,
            kwargs={},
        )

        assert result == [{"id": 1}, 1, {"id": 2}, 1]
