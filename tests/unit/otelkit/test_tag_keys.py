"""Tests for canonical tag keys."""

from otelkit import tag_keys


class TestTagKeys:
    """Tests for the tag key registry."""

    def test_service_keys(self) -> None:
        """Service keys match the semantic names."""
        assert tag_keys.SERVICE_NAME == "service.name"
        assert tag_keys.SERVICE_VERSION == "service.version"
        assert tag_keys.SERVICE_INSTANCE == "service.instance.id"

    def test_http_keys(self) -> None:
        """HTTP keys match the semantic names."""
        assert tag_keys.HTTP_METHOD == "http.method"
        assert tag_keys.HTTP_URL == "http.url"
        assert tag_keys.HTTP_STATUS_CODE == "http.status_code"
        assert tag_keys.HTTP_USER_AGENT == "http.user_agent"

    def test_db_keys(self) -> None:
        """Database keys match the semantic names."""
        assert tag_keys.DB_SYSTEM == "db.system"
        assert tag_keys.DB_NAME == "db.name"
        assert tag_keys.DB_OPERATION == "db.operation"
        assert tag_keys.DB_STATEMENT == "db.statement"

    def test_messaging_keys(self) -> None:
        """Messaging keys match the semantic names."""
        assert tag_keys.MESSAGING_SYSTEM == "messaging.system"
        assert tag_keys.MESSAGING_DESTINATION == "messaging.destination"
        assert tag_keys.MESSAGING_OPERATION == "messaging.operation"
        assert tag_keys.MESSAGING_KAFKA_TOPIC == "messaging.kafka.topic"
        assert tag_keys.MESSAGING_KAFKA_PARTITION == "messaging.kafka.partition"
        assert tag_keys.MESSAGING_KAFKA_OFFSET == "messaging.kafka.offset"

    def test_user_error_and_business_keys(self) -> None:
        """User, error and business keys match the semantic names."""
        assert tag_keys.USER_ID == "user.id"
        assert tag_keys.USER_EMAIL == "user.email"
        assert tag_keys.USER_NAME == "user.name"
        assert tag_keys.ERROR_TYPE == "error.type"
        assert tag_keys.ERROR_MESSAGE == "error.message"
        assert tag_keys.CORRELATION_ID == "correlation.id"
        assert tag_keys.TENANT_ID == "tenant.id"
        assert tag_keys.REQUEST_ID == "request.id"

    def test_all_tag_keys_complete(self) -> None:
        """ALL_TAG_KEYS contains every key exactly once."""
        assert len(tag_keys.ALL_TAG_KEYS) == 25
        assert "messaging.kafka.offset" in tag_keys.ALL_TAG_KEYS
