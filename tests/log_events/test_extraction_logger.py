"""Tests for extraction event logging."""

from objscope.logging import ExtractionLogger, LogContext


class RecordingLogger:
    """Stands in for a structlog bound logger."""

    def __init__(self, **context) -> None:
        self.context = context
        self.events: list[tuple[str, str, dict]] = []

    def bind(self, **kwargs) -> "RecordingLogger":
        bound = RecordingLogger(**{**self.context, **kwargs})
        bound.events = self.events
        return bound

    def debug(self, event, **kwargs) -> None:
        self.events.append(("debug", event, {**self.context, **kwargs}))

    def info(self, event, **kwargs) -> None:
        self.events.append(("info", event, {**self.context, **kwargs}))


class TestExtractionLogger:
    """Test start and end events of an extraction call."""

    def test_start_returns_context(self):
        base = RecordingLogger()
        logger = ExtractionLogger(base)

        context = logger.log_extraction_start("properties", "Reflection Strategy", 3)

        assert context["operation"] == "properties"
        assert context["object_type"] == "int"
        assert base.events[0][:2] == ("debug", "extraction_started")
        assert base.events[0][2]["strategy"] == "Reflection Strategy"
        assert base.context == {}

    def test_clean_extraction_logs_at_debug(self):
        base = RecordingLogger()
        logger = ExtractionLogger(base)
        context = logger.log_extraction_start("collections", "Reflection Strategy", [])

        logger.log_extraction_end(context, entries=2)

        level, event, data = base.events[-1]
        assert (level, event) == ("debug", "extraction_completed")
        assert data["entries"] == 2
        assert data["duration"] >= 0

    def test_errors_log_at_info(self):
        base = RecordingLogger()
        logger = ExtractionLogger(base)
        context = logger.log_extraction_start("properties", "Reflection Strategy", object())

        logger.log_extraction_end(context, entries=3, errors=1)

        level, event, data = base.events[-1]
        assert (level, event) == ("info", "extraction_completed_with_errors")
        assert data["errors"] == 1
        assert data["operation"] == "properties"
        assert data["object_type"] == "object"


class TestLogContext:
    def test_binds_values(self):
        base = RecordingLogger()

        with LogContext(base, object_type="Circle") as bound:
            assert bound.context == {"object_type": "Circle"}
