"""Canonical attribute keys for spans and metric measurements.

Values follow the OpenTelemetry semantic naming used by existing backends,
so they must not be changed.
"""

# Service attributes
SERVICE_NAME = "service.name"
SERVICE_VERSION = "service.version"
SERVICE_INSTANCE = "service.instance.id"

# HTTP attributes
HTTP_METHOD = "http.method"
HTTP_URL = "http.url"
HTTP_STATUS_CODE = "http.status_code"
HTTP_USER_AGENT = "http.user_agent"

# Database attributes
DB_SYSTEM = "db.system"
DB_NAME = "db.name"
DB_OPERATION = "db.operation"
DB_STATEMENT = "db.statement"

# Messaging attributes (Kafka)
MESSAGING_SYSTEM = "messaging.system"
MESSAGING_DESTINATION = "messaging.destination"
MESSAGING_OPERATION = "messaging.operation"
MESSAGING_KAFKA_TOPIC = "messaging.kafka.topic"
MESSAGING_KAFKA_PARTITION = "messaging.kafka.partition"
MESSAGING_KAFKA_OFFSET = "messaging.kafka.offset"

# User attributes
USER_ID = "user.id"
USER_EMAIL = "user.email"
USER_NAME = "user.name"

# Error attributes
ERROR_TYPE = "error.type"
ERROR_MESSAGE = "error.message"

# Business attributes
CORRELATION_ID = "correlation.id"
TENANT_ID = "tenant.id"
REQUEST_ID = "request.id"

ALL_TAG_KEYS: frozenset[str] = frozenset({
    SERVICE_NAME,
    SERVICE_VERSION,
    SERVICE_INSTANCE,
    HTTP_METHOD,
    HTTP_URL,
    HTTP_STATUS_CODE,
    HTTP_USER_AGENT,
    DB_SYSTEM,
    DB_NAME,
    DB_OPERATION,
    DB_STATEMENT,
    MESSAGING_SYSTEM,
    MESSAGING_DESTINATION,
    MESSAGING_OPERATION,
    MESSAGING_KAFKA_TOPIC,
    MESSAGING_KAFKA_PARTITION,
    MESSAGING_KAFKA_OFFSET,
    USER_ID,
    USER_EMAIL,
    USER_NAME,
    ERROR_TYPE,
    ERROR_MESSAGE,
    CORRELATION_ID,
    TENANT_ID,
    REQUEST_ID,
})
