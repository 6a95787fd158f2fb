import logging
import threading

import pytest

from vws.errors import ApiError, PreconditionError, ServerError, WaitCancelled, WaitTimeout
from vws.models import GetTargetResponse
from vws.waiter import DEFAULT_INTERVAL, EXTENDED_INTERVAL, wait_until_processed


def _status(status):
    return GetTargetResponse.from_dict(
        {"result_code": "Success", "transaction_id": "tx", "status": status}
    )


class ScriptedClient:
    """Return (or raise) scripted get_target results in order."""

    def __init__(self, results):
        self._results = list(results)
        self.polls = []

    def get_target(self, request):
        self.polls.append(request.target_id)
        result = self._results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


class RecordingEvent:
    """Event double that records wait intervals instead of sleeping."""

    def __init__(self, fire_on_wait=None):
        self.intervals = []
        self._fire_on_wait = fire_on_wait
        self._set = False

    def is_set(self):
        return self._set

    def set(self):
        self._set = True

    def wait(self, timeout=None):
        self.intervals.append(timeout)
        if self._fire_on_wait is not None and len(self.intervals) >= self._fire_on_wait:
            self._set = True
        return self._set


def test_returns_after_terminal_success() -> None:
    client = ScriptedClient([_status("processing"), _status("processing"), _status("success")])
    event = RecordingEvent()

    response = wait_until_processed(client, "abc123", cancel=event)

    assert response.status == "success"
    assert client.polls == ["abc123"] * 3
    assert event.intervals == [DEFAULT_INTERVAL] * 3


def test_failed_status_is_terminal_not_an_error() -> None:
    client = ScriptedClient([_status("processing"), _status("Failed")])

    response = wait_until_processed(client, "abc123", cancel=RecordingEvent())

    assert response.status == "Failed"
    assert len(client.polls) == 2


def test_status_is_case_insensitive() -> None:
    client = ScriptedClient([_status("SUCCESS")])

    wait_until_processed(client, "abc123", cancel=RecordingEvent())

    assert len(client.polls) == 1


def test_unknown_status_keeps_waiting() -> None:
    client = ScriptedClient([_status("queued"), _status(""), _status("success")])
    event = RecordingEvent()

    wait_until_processed(client, "abc123", cancel=event)

    assert event.intervals == [DEFAULT_INTERVAL] * 3


def test_rate_limit_extends_interval_once() -> None:
    client = ScriptedClient(
        [
            ApiError("RequestQuotaReached", "tx", 429),
            _status("processing"),
            _status("success"),
        ]
    )
    event = RecordingEvent()

    response = wait_until_processed(client, "abc123", cancel=event)

    assert response.status == "success"
    assert event.intervals == [DEFAULT_INTERVAL, EXTENDED_INTERVAL, DEFAULT_INTERVAL]
    assert len(client.polls) == 3


def test_custom_intervals() -> None:
    client = ScriptedClient(
        [ApiError("requestquotareached", "tx", 429), _status("success")]
    )
    event = RecordingEvent()

    wait_until_processed(
        client, "abc123", cancel=event, default_interval=0.5, extended_interval=2.0
    )

    assert event.intervals == [0.5, 2.0]


def test_other_api_error_is_raised() -> None:
    client = ScriptedClient([_status("processing"), ApiError("UnknownTarget", "tx", 404)])

    with pytest.raises(ApiError) as excinfo:
        wait_until_processed(client, "abc123", cancel=RecordingEvent())

    assert excinfo.value.result_code == "UnknownTarget"
    assert len(client.polls) == 2


@pytest.mark.parametrize(
    "error", [ServerError(500), PreconditionError("target_id must be provided")]
)
def test_non_api_errors_are_raised(error) -> None:
    client = ScriptedClient([error])

    with pytest.raises(type(error)):
        wait_until_processed(client, "abc123", cancel=RecordingEvent())


def test_cancel_during_wait_stops_polling() -> None:
    client = ScriptedClient([_status("processing"), _status("success")])
    event = RecordingEvent(fire_on_wait=2)

    with pytest.raises(WaitCancelled) as excinfo:
        wait_until_processed(client, "abc123", cancel=event)

    assert excinfo.value.target_id == "abc123"
    assert len(client.polls) == 1


def test_cancel_before_start_never_polls() -> None:
    client = ScriptedClient([_status("success")])
    event = threading.Event()
    event.set()

    with pytest.raises(WaitCancelled):
        wait_until_processed(client, "abc123", cancel=event)

    assert client.polls == []


def test_timeout_raises_wait_timeout() -> None:
    client = ScriptedClient([_status("processing")] * 10)

    with pytest.raises(WaitTimeout) as excinfo:
        wait_until_processed(client, "abc123", timeout=0.05, default_interval=0.01)

    assert isinstance(excinfo.value, WaitCancelled)
    assert 1 <= len(client.polls) <= 5


def test_zero_timeout_never_polls() -> None:
    client = ScriptedClient([_status("success")])

    with pytest.raises(WaitTimeout):
        wait_until_processed(client, "abc123", timeout=0, default_interval=0.01)

    assert client.polls == []


@pytest.mark.parametrize("target_id", ["", "   "])
def test_blank_target_id_fails_before_waiting(target_id) -> None:
    client = ScriptedClient([_status("success")])
    event = RecordingEvent()

    with pytest.raises(PreconditionError, match="target_id"):
        wait_until_processed(client, target_id, cancel=event)

    assert event.intervals == []
    assert client.polls == []


def test_rate_limit_back_off_is_quiet_above_debug(caplog) -> None:
    client = ScriptedClient([ApiError("RequestQuotaReached", "tx", 429), _status("success")])

    with caplog.at_level(logging.INFO, logger="vws.waiter"):
        wait_until_processed(client, "abc123", cancel=RecordingEvent())

    assert not [r for r in caplog.records if r.name == "vws.waiter"]
