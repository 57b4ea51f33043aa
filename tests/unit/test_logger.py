"""
Тесты для structured logging

Проверяет:
- get_logger привязывает имя модуля
- Процессоры event_type / timestamp
"""

from structlog.testing import capture_logs

from src.core.logger import _add_timestamp, _normalize_event, get_logger


def test_get_logger_binds_name() -> None:
    with capture_logs() as logs:
        get_logger("src.compute.test").info("quorum_not_met", valid_attestations=1)

    assert logs == [
        {
            "event": "quorum_not_met",
            "log_level": "info",
            "logger": "src.compute.test",
            "valid_attestations": 1,
        }
    ]


def test_normalize_event() -> None:
    event_dict = _normalize_event(None, "info", {"event": "claim_blocked"})
    assert event_dict == {"event_type": "claim_blocked"}


def test_add_timestamp_keeps_existing() -> None:
    assert _add_timestamp(None, "info", {"timestamp": "t"}) == {"timestamp": "t"}
    assert "timestamp" in _add_timestamp(None, "info", {})
