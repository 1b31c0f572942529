"""Unit tests for infrastructure observability primitives."""

from unittest.mock import Mock

from infrastructure.observability import DefaultConnectionProbe, ObservationContext


class TestObservationContext:
    """Tests for ObservationContext."""

    def test_as_dict_skips_unset_values(self):
        context = ObservationContext(request_id="req-1")
        assert context.as_dict() == {"request_id": "req-1"}

    def test_as_dict_includes_website_and_extra(self):
        context = ObservationContext(
            user_id="user-1", website_id="site-1", extra={"route": "/actions"}
        )
        assert context.as_dict() == {
            "user_id": "user-1",
            "website_id": "site-1",
            "route": "/actions",
        }

    def test_with_website_returns_new_context(self):
        context = ObservationContext(request_id="req-1")

        scoped = context.with_website("site-9")

        assert scoped.website_id == "site-9"
        assert scoped.request_id == "req-1"
        assert context.website_id is None

    def test_with_extra_merges(self):
        context = ObservationContext(extra={"a": 1})
        assert context.with_extra(b=2).extra == {"a": 1, "b": 2}
        assert context.extra == {"a": 1}


class TestDefaultConnectionProbe:
    """Tests for DefaultConnectionProbe."""

    def test_engine_created_logs_pool_size(self):
        mock_logger = Mock()
        probe = DefaultConnectionProbe(logger=mock_logger)

        probe.engine_created(host="db", database="wphub", pool_size=10)

        mock_logger.info.assert_called_once()
        call_args = mock_logger.info.call_args
        assert call_args[0][0] == "database_engine_created"
        assert call_args[1]["pool_size"] == 10

    def test_connection_failed_logs_error(self):
        mock_logger = Mock()
        probe = DefaultConnectionProbe(logger=mock_logger)

        probe.connection_failed(host="db", database="wphub", error=OSError("refused"))

        call_args = mock_logger.error.call_args
        assert call_args[0][0] == "database_connection_failed"
        assert call_args[1]["error"] == "refused"

    def test_with_context_includes_context_fields(self):
        mock_logger = Mock()
        probe = DefaultConnectionProbe(logger=mock_logger).with_context(
            ObservationContext(request_id="req-7")
        )

        probe.pool_closed()

        assert mock_logger.info.call_args[1]["request_id"] == "req-7"
