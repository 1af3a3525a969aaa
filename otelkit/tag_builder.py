"""Fluent builder for span and metric attribute collections.

Usage:
    tags = (
        TagBuilder.create()
        .add_service_name("orders")
        .add_http_method("POST")
        .add_http_status_code(201)
    )
    record_with_tags(request_counter, 1, tags)
"""

from collections.abc import Iterable, Iterator
from typing import Any

from opentelemetry.util.types import AttributeValue

from otelkit import tag_keys

Tag = tuple[str, Any]


def attributes_from_pairs(pairs: Iterable[Tag]) -> dict[str, AttributeValue]:
    """Collapse (key, value) pairs into an OpenTelemetry attribute mapping.

    Pairs are applied in order, so the last value for a key wins. A None
    value removes whatever the key held before, since OpenTelemetry does
    not accept None attributes.
    """
    attributes: dict[str, AttributeValue] = {}
    for key, value in pairs:
        if value is None:
            attributes.pop(key, None)
        else:
            attributes[key] = value
    return attributes


class TagBuilder:
    """Ordered, append-only collection of (key, value) tags.

    Entries keep insertion order and duplicate keys are kept as separate
    entries. Only `to_attributes()` collapses duplicates (last value wins,
    None removes), because that is how OpenTelemetry attribute mappings
    behave.

    A builder is a short-lived staging object for a single call path and
    is not safe to share between threads.
    """

    def __init__(self) -> None:
        self._tags: list[Tag] = []

    @classmethod
    def create(cls) -> "TagBuilder":
        """Create an empty builder."""
        return cls()

    def add_tag(self, key: str, value: Any) -> "TagBuilder":
        """Append an arbitrary tag. The value may be None."""
        self._tags.append((key, value))
        return self

    # Service attributes
    def add_service_name(self, service_name: str) -> "TagBuilder":
        return self.add_tag(tag_keys.SERVICE_NAME, service_name)

    def add_service_version(self, version: str) -> "TagBuilder":
        return self.add_tag(tag_keys.SERVICE_VERSION, version)

    def add_service_instance(self, instance_id: str) -> "TagBuilder":
        return self.add_tag(tag_keys.SERVICE_INSTANCE, instance_id)

    # HTTP attributes
    def add_http_method(self, method: str) -> "TagBuilder":
        return self.add_tag(tag_keys.HTTP_METHOD, method)

    def add_http_url(self, url: str) -> "TagBuilder":
        return self.add_tag(tag_keys.HTTP_URL, url)

    def add_http_status_code(self, status_code: int) -> "TagBuilder":
        return self.add_tag(tag_keys.HTTP_STATUS_CODE, status_code)

    def add_http_user_agent(self, user_agent: str) -> "TagBuilder":
        return self.add_tag(tag_keys.HTTP_USER_AGENT, user_agent)

    # Database attributes
    def add_db_system(self, system: str) -> "TagBuilder":
        return self.add_tag(tag_keys.DB_SYSTEM, system)

    def add_db_name(self, name: str) -> "TagBuilder":
        return self.add_tag(tag_keys.DB_NAME, name)

    def add_db_operation(self, operation: str) -> "TagBuilder":
        return self.add_tag(tag_keys.DB_OPERATION, operation)

    def add_db_statement(self, statement: str) -> "TagBuilder":
        return self.add_tag(tag_keys.DB_STATEMENT, statement)

    # Messaging attributes (Kafka)
    def add_messaging_system(self, system: str) -> "TagBuilder":
        return self.add_tag(tag_keys.MESSAGING_SYSTEM, system)

    def add_messaging_destination(self, destination: str) -> "TagBuilder":
        return self.add_tag(tag_keys.MESSAGING_DESTINATION, destination)

    def add_messaging_operation(self, operation: str) -> "TagBuilder":
        return self.add_tag(tag_keys.MESSAGING_OPERATION, operation)

    def add_messaging_kafka_topic(self, topic: str) -> "TagBuilder":
        return self.add_tag(tag_keys.MESSAGING_KAFKA_TOPIC, topic)

    def add_messaging_kafka_partition(self, partition: int) -> "TagBuilder":
        return self.add_tag(tag_keys.MESSAGING_KAFKA_PARTITION, partition)

    def add_messaging_kafka_offset(self, offset: int) -> "TagBuilder":
        return self.add_tag(tag_keys.MESSAGING_KAFKA_OFFSET, offset)

    # User attributes
    def add_user_id(self, user_id: str) -> "TagBuilder":
        return self.add_tag(tag_keys.USER_ID, user_id)

    def add_user_email(self, email: str) -> "TagBuilder":
        return self.add_tag(tag_keys.USER_EMAIL, email)

    def add_user_name(self, username: str) -> "TagBuilder":
        return self.add_tag(tag_keys.USER_NAME, username)

    # Error attributes
    def add_error_type(self, error_type: str) -> "TagBuilder":
        return self.add_tag(tag_keys.ERROR_TYPE, error_type)

    def add_error_message(self, message: str) -> "TagBuilder":
        return self.add_tag(tag_keys.ERROR_MESSAGE, message)

    # Business attributes
    def add_correlation_id(self, correlation_id: str) -> "TagBuilder":
        return self.add_tag(tag_keys.CORRELATION_ID, correlation_id)

    def add_tenant_id(self, tenant_id: str) -> "TagBuilder":
        return self.add_tag(tag_keys.TENANT_ID, tenant_id)

    def add_request_id(self, request_id: str) -> "TagBuilder":
        return self.add_tag(tag_keys.REQUEST_ID, request_id)

    # Conversions
    def to_list(self) -> list[Tag]:
        """Snapshot of the entries as a new list."""
        return list(self._tags)

    def to_tuple(self) -> tuple[Tag, ...]:
        """Immutable snapshot of the entries."""
        return tuple(self._tags)

    def to_attributes(self) -> dict[str, AttributeValue]:
        """Convert to an OpenTelemetry attribute mapping.

        Later duplicates overwrite earlier ones and a None value removes
        the key.
        """
        return attributes_from_pairs(self._tags)

    def __iter__(self) -> Iterator[Tag]:
        return iter(list(self._tags))

    def __len__(self) -> int:
        return len(self._tags)

    def __bool__(self) -> bool:
        return bool(self._tags)

    def __repr__(self) -> str:
        return f"TagBuilder({self._tags!r})"
