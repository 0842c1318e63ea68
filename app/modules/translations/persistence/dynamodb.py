"""DynamoDB-backed translation backend for multi-instance deployments.

Single-table design keyed by a string partition key ``pk``:

    TRANSLATION#{id}                        translation row, tag ids as a list
    KEY_LOCALE#{len(locale)}#{locale}#{key} uniqueness sentinel -> translation_id
    TAG#{id}                                tag row
    TAG_NAME#{name}                         uniqueness sentinel -> tag_id

Every mutation is a single ``TransactWriteItems`` call whose condition
expressions enforce uniqueness and the optimistic version check, so the
row, its sentinel, its tag associations and any tags it introduces change
together or not at all.
"""

from datetime import datetime
from typing import Any, Dict, FrozenSet, List, Optional, Sequence

from boto3.dynamodb.types import TypeDeserializer, TypeSerializer  # type: ignore

from infrastructure.clients.aws import DynamoDBClient
from infrastructure.logging import get_module_logger
from infrastructure.operations import OperationResult
from modules.translations.domain.errors import (
    ConcurrentModificationError,
    DuplicateKeyError,
    NotFoundError,
    StorageError,
    TagConflictError,
)
from modules.translations.domain.models import Tag
from modules.translations.persistence.base import TranslationRow

logger = get_module_logger()

TRANSACTION_CANCELED = "TransactionCanceledException"
CONDITION_FAILED = "ConditionalCheckFailed"

_serializer = TypeSerializer()
_deserializer = TypeDeserializer()


def translation_pk(translation_id: str) -> str:
    return f"TRANSLATION#{translation_id}"


def key_locale_pk(key: str, locale: str) -> str:
    # Length prefix keeps "a#b" + "c" distinct from "a" + "b#c"
    return f"KEY_LOCALE#{len(locale)}#{locale}#{key}"


def tag_pk(tag_id: str) -> str:
    return f"TAG#{tag_id}"


def tag_name_pk(name: str) -> str:
    return f"TAG_NAME#{name}"


def _marshal(values: Dict[str, Any]) -> Dict[str, Any]:
    return {k: _serializer.serialize(v) for k, v in values.items() if v is not None}


def _unmarshal(item: Dict[str, Any]) -> Dict[str, Any]:
    return {k: _deserializer.deserialize(v) for k, v in item.items()}


class DynamoDBTranslationBackend:
    """DynamoDB implementation of TranslationBackend.

    Reads use strongly consistent ``get_item`` calls; scans follow
    pagination through the client. Conditional failures are classified
    into the domain error taxonomy; any other failure raises StorageError.

    Args:
        client: DynamoDBClient returning OperationResult
        table_name: DynamoDB table name
    """

    def __init__(self, client: DynamoDBClient, table_name: str):
        self.client = client
        self.table_name = table_name

        logger.info("dynamodb_translation_backend_initialized", table_name=table_name)

    # Translations

    def insert_translation(
        self, row: TranslationRow, new_tags: Sequence[Tag] = ()
    ) -> None:
        items = [
            self._put(self._translation_item(row), "attribute_not_exists(pk)"),
            self._put(self._sentinel_item(row), "attribute_not_exists(pk)"),
        ]
        tags_at = len(items)
        for tag in new_tags:
            items.extend(self._tag_items(tag))

        result = self.client.transact_write_items(TransactItems=items)
        if result.is_success:
            return

        if self._failed_at(result, 1):
            raise DuplicateKeyError(
                f"Translation already exists for key '{row.key}' "
                f"and locale '{row.locale}'"
            )
        self._raise_tag_conflict(result, new_tags, tags_at)
        raise self._storage_error("insert_translation", result)

    def replace_translation(
        self,
        current: TranslationRow,
        updated: TranslationRow,
        new_tags: Sequence[Tag] = (),
    ) -> None:
        items = [
            self._put(
                self._translation_item(updated),
                "attribute_exists(pk) AND version = :expected",
                {":expected": _serializer.serialize(current.version)},
            )
        ]
        pair_changed = (current.key, current.locale) != (updated.key, updated.locale)
        if pair_changed:
            items.append(self._delete_sentinel(current))
            items.append(
                self._put(self._sentinel_item(updated), "attribute_not_exists(pk)")
            )
        tags_at = len(items)
        for tag in new_tags:
            items.extend(self._tag_items(tag))

        result = self.client.transact_write_items(TransactItems=items)
        if result.is_success:
            return

        if self._failed_at(result, 0) or (pair_changed and self._failed_at(result, 1)):
            self._raise_row_conflict(current)
        if pair_changed and self._failed_at(result, 2):
            raise DuplicateKeyError(
                f"Translation already exists for key '{updated.key}' "
                f"and locale '{updated.locale}'"
            )
        self._raise_tag_conflict(result, new_tags, tags_at)
        raise self._storage_error("replace_translation", result)

    def delete_translation(self, current: TranslationRow) -> None:
        result = self.client.transact_write_items(
            TransactItems=[
                {
                    "Delete": {
                        "TableName": self.table_name,
                        "Key": {"pk": {"S": translation_pk(current.id)}},
                        "ConditionExpression": "version = :expected",
                        "ExpressionAttributeValues": {
                            ":expected": _serializer.serialize(current.version)
                        },
                    }
                },
                self._delete_sentinel(current),
            ]
        )
        if result.is_success:
            return

        if self._failed_at(result, 0) or self._failed_at(result, 1):
            self._raise_row_conflict(current)
        raise self._storage_error("delete_translation", result)

    def get_translation(self, translation_id: str) -> Optional[TranslationRow]:
        item = self._get(translation_pk(translation_id))
        return self._row_from_item(item) if item else None

    def find_translation(self, key: str, locale: str) -> Optional[TranslationRow]:
        sentinel = self._get(key_locale_pk(key, locale))
        if not sentinel:
            return None
        return self.get_translation(sentinel["translation_id"])

    def scan_translations(self, locale: Optional[str] = None) -> List[TranslationRow]:
        kwargs: Dict[str, Any] = {
            "FilterExpression": "#entity = :entity",
            "ExpressionAttributeNames": {"#entity": "entity"},
            "ExpressionAttributeValues": {":entity": {"S": "translation"}},
            "ConsistentRead": True,
        }
        if locale is not None:
            kwargs["FilterExpression"] += " AND #locale = :locale"
            kwargs["ExpressionAttributeNames"]["#locale"] = "locale"
            kwargs["ExpressionAttributeValues"][":locale"] = {"S": locale}

        result = self.client.scan(self.table_name, **kwargs)
        if not result.is_success:
            raise self._storage_error("scan_translations", result)
        return [self._row_from_item(_unmarshal(item)) for item in result.data or []]

    # Tags

    def insert_tag(self, tag: Tag) -> None:
        result = self.client.transact_write_items(TransactItems=self._tag_items(tag))
        if result.is_success:
            return

        if self._failed_at(result, 1):
            raise DuplicateKeyError(f"Tag already exists with name: {tag.name}")
        raise self._storage_error("insert_tag", result)

    def find_tag_by_name(self, name: str) -> Optional[Tag]:
        sentinel = self._get(tag_name_pk(name))
        if not sentinel:
            return None
        item = self._get(tag_pk(sentinel["tag_id"]))
        return self._tag_from_item(item) if item else None

    def get_tags(self, tag_ids: FrozenSet[str]) -> List[Tag]:
        tags = []
        for tag_id in sorted(tag_ids):
            item = self._get(tag_pk(tag_id))
            if item:
                tags.append(self._tag_from_item(item))
        return tags

    def scan_tags(self) -> List[Tag]:
        result = self.client.scan(
            self.table_name,
            FilterExpression="#entity = :entity",
            ExpressionAttributeNames={"#entity": "entity"},
            ExpressionAttributeValues={":entity": {"S": "tag"}},
            ConsistentRead=True,
        )
        if not result.is_success:
            raise self._storage_error("scan_tags", result)
        return [self._tag_from_item(_unmarshal(item)) for item in result.data or []]

    # Helpers

    def _get(self, pk: str) -> Optional[Dict[str, Any]]:
        result = self.client.get_item(
            self.table_name, Key={"pk": {"S": pk}}, ConsistentRead=True
        )
        if not result.is_success:
            raise self._storage_error("get_item", result)
        item = (result.data or {}).get("Item")
        return _unmarshal(item) if item else None

    def _put(
        self,
        item: Dict[str, Any],
        condition: str,
        values: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        put: Dict[str, Any] = {
            "TableName": self.table_name,
            "Item": item,
            "ConditionExpression": condition,
        }
        if values:
            put["ExpressionAttributeValues"] = values
        return {"Put": put}

    def _delete_sentinel(self, row: TranslationRow) -> Dict[str, Any]:
        return {
            "Delete": {
                "TableName": self.table_name,
                "Key": {"pk": {"S": key_locale_pk(row.key, row.locale)}},
                "ConditionExpression": "translation_id = :id",
                "ExpressionAttributeValues": {":id": {"S": row.id}},
            }
        }

    def _tag_items(self, tag: Tag) -> List[Dict[str, Any]]:
        row = {
            "pk": tag_pk(tag.id),
            "entity": "tag",
            "id": tag.id,
            "name": tag.name,
            "description": tag.description,
            "created_at": tag.created_at.isoformat(),
            "updated_at": tag.updated_at.isoformat(),
        }
        sentinel = {"pk": tag_name_pk(tag.name), "entity": "tag_name", "tag_id": tag.id}
        return [
            self._put(_marshal(row), "attribute_not_exists(pk)"),
            self._put(_marshal(sentinel), "attribute_not_exists(pk)"),
        ]

    def _translation_item(self, row: TranslationRow) -> Dict[str, Any]:
        return _marshal(
            {
                "pk": translation_pk(row.id),
                "entity": "translation",
                "id": row.id,
                "key": row.key,
                "locale": row.locale,
                "content": row.content,
                "tag_ids": sorted(row.tag_ids),
                "created_at": row.created_at.isoformat(),
                "updated_at": row.updated_at.isoformat(),
                "version": row.version,
            }
        )

    def _sentinel_item(self, row: TranslationRow) -> Dict[str, Any]:
        return _marshal(
            {
                "pk": key_locale_pk(row.key, row.locale),
                "entity": "key_locale",
                "translation_id": row.id,
            }
        )

    def _row_from_item(self, item: Dict[str, Any]) -> TranslationRow:
        return TranslationRow(
            id=item["id"],
            key=item["key"],
            locale=item["locale"],
            content=item["content"],
            tag_ids=frozenset(item.get("tag_ids") or []),
            created_at=datetime.fromisoformat(item["created_at"]),
            updated_at=datetime.fromisoformat(item["updated_at"]),
            version=int(item["version"]),
        )

    def _tag_from_item(self, item: Dict[str, Any]) -> Tag:
        return Tag(
            id=item["id"],
            name=item["name"],
            description=item.get("description"),
            created_at=datetime.fromisoformat(item["created_at"]),
            updated_at=datetime.fromisoformat(item["updated_at"]),
        )

    def _failed_at(self, result: OperationResult, index: int) -> bool:
        """True when the transaction was canceled by the condition at ``index``."""
        if result.error_code != TRANSACTION_CANCELED:
            return False
        reasons = (result.data or {}).get("cancellation_reasons") or []
        return index < len(reasons) and reasons[index] == CONDITION_FAILED

    def _raise_row_conflict(self, current: TranslationRow) -> None:
        stored = self.get_translation(current.id)
        if stored is None:
            raise NotFoundError(f"Translation not found with id: {current.id}")
        raise ConcurrentModificationError(
            f"Translation {current.id} was modified concurrently",
            expected_version=current.version,
            actual_version=stored.version,
        )

    def _raise_tag_conflict(
        self, result: OperationResult, new_tags: Sequence[Tag], start: int
    ) -> None:
        # Each new tag occupies two items: its row, then its name sentinel
        taken = [
            tag.name
            for position, tag in enumerate(new_tags)
            if self._failed_at(result, start + 2 * position + 1)
        ]
        if taken:
            raise TagConflictError(taken)

    def _storage_error(self, operation: str, result: OperationResult) -> StorageError:
        logger.error(
            "translation_storage_failed",
            operation=operation,
            table_name=self.table_name,
            status=result.status.value,
            error_code=result.error_code,
            message=result.message,
        )
        return StorageError(
            f"{operation} failed: {result.message}",
            error_code=result.error_code,
            response=result,
        )
