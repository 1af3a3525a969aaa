"""Helpers that set canonical attributes on a span.

Every helper accepts ``None`` in place of a span and then does nothing:
a missing span means tracing is disabled or the span was not sampled,
and tagging must never break the caller.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from opentelemetry.trace import Span

from otelkit import tag_keys
from otelkit.tag_builder import TagBuilder

# Attached by add_tag() for None values, distinct from an empty string
NO_VALUE = "<none>"

Tags = TagBuilder | Mapping[str, Any] | Iterable[tuple[str, Any]]


def _set(span: Span | None, key: str, value: Any) -> None:
    if span is None:
        return
    span.set_attribute(key, value)


# Service attributes
def add_service_name(span: Span | None, service_name: str) -> None:
    _set(span, tag_keys.SERVICE_NAME, service_name)


def add_service_version(span: Span | None, version: str) -> None:
    _set(span, tag_keys.SERVICE_VERSION, version)


def add_service_instance(span: Span | None, instance_id: str) -> None:
    _set(span, tag_keys.SERVICE_INSTANCE, instance_id)


# HTTP attributes
def add_http_method(span: Span | None, method: str) -> None:
    _set(span, tag_keys.HTTP_METHOD, method)


def add_http_url(span: Span | None, url: str) -> None:
    _set(span, tag_keys.HTTP_URL, url)


def add_http_status_code(span: Span | None, status_code: int) -> None:
    _set(span, tag_keys.HTTP_STATUS_CODE, status_code)


def add_http_user_agent(span: Span | None, user_agent: str) -> None:
    _set(span, tag_keys.HTTP_USER_AGENT, user_agent)


# Database attributes
def add_db_system(span: Span | None, system: str) -> None:
    _set(span, tag_keys.DB_SYSTEM, system)


def add_db_name(span: Span | None, name: str) -> None:
    _set(span, tag_keys.DB_NAME, name)


def add_db_operation(span: Span | None, operation: str) -> None:
    _set(span, tag_keys.DB_OPERATION, operation)


def add_db_statement(span: Span | None, statement: str) -> None:
    _set(span, tag_keys.DB_STATEMENT, statement)


# Messaging attributes (Kafka)
def add_messaging_system(span: Span | None, system: str) -> None:
    _set(span, tag_keys.MESSAGING_SYSTEM, system)


def add_messaging_destination(span: Span | None, destination: str) -> None:
    _set(span, tag_keys.MESSAGING_DESTINATION, destination)


def add_messaging_operation(span: Span | None, operation: str) -> None:
    _set(span, tag_keys.MESSAGING_OPERATION, operation)


def add_messaging_kafka_topic(span: Span | None, topic: str) -> None:
    _set(span, tag_keys.MESSAGING_KAFKA_TOPIC, topic)


def add_messaging_kafka_partition(span: Span | None, partition: int) -> None:
    _set(span, tag_keys.MESSAGING_KAFKA_PARTITION, partition)


def add_messaging_kafka_offset(span: Span | None, offset: int) -> None:
    _set(span, tag_keys.MESSAGING_KAFKA_OFFSET, offset)


# User attributes
def add_user_id(span: Span | None, user_id: str) -> None:
    _set(span, tag_keys.USER_ID, user_id)


def add_user_email(span: Span | None, email: str) -> None:
    _set(span, tag_keys.USER_EMAIL, email)


def add_user_name(span: Span | None, username: str) -> None:
    _set(span, tag_keys.USER_NAME, username)


# Error attributes
def add_error_type(span: Span | None, error_type: str) -> None:
    _set(span, tag_keys.ERROR_TYPE, error_type)


def add_error_message(span: Span | None, message: str) -> None:
    _set(span, tag_keys.ERROR_MESSAGE, message)


# Business attributes
def add_correlation_id(span: Span | None, correlation_id: str) -> None:
    _set(span, tag_keys.CORRELATION_ID, correlation_id)


def add_tenant_id(span: Span | None, tenant_id: str) -> None:
    _set(span, tag_keys.TENANT_ID, tenant_id)


def add_request_id(span: Span | None, request_id: str) -> None:
    _set(span, tag_keys.REQUEST_ID, request_id)


# Generic attributes
def add_tag(span: Span | None, key: str, value: Any) -> None:
    """Set an arbitrary attribute as text.

    Values are converted with str(); None is attached as NO_VALUE so it
    stays distinguishable from an empty string.

    Args:
        span: Span to tag, or None
        key: Attribute key
        value: Attribute value of any type
    """
    _set(span, key, NO_VALUE if value is None else str(value))


def iter_tags(tags: Tags | None) -> Iterable[tuple[str, Any]]:
    """Normalize the accepted tag shapes to (key, value) pairs."""
    if tags is None:
        return ()
    if isinstance(tags, Mapping):
        return tags.items()
    return tags


def add_tags(span: Span | None, tags: Tags) -> None:
    """Apply add_tag() to each (key, value) pair, in order.

    Args:
        span: Span to tag, or None
        tags: TagBuilder, mapping, or iterable of (key, value) pairs
    """
    if span is None:
        return
    for key, value in iter_tags(tags):
        add_tag(span, key, value)
