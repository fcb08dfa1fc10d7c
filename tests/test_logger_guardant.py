import pytest

from liftsim.logger import Logger, Severity
from liftsim.logger_guardant import LoggerGuardant


class _Recorder(Logger):
    def __init__(self):
        self.records = []

    def log(self, message, severity):
        self.records.append((message, severity))
        return self


class _Guarded(LoggerGuardant):
    def __init__(self, target=None):
        self.target = target

    def get_logger(self):
        return self.target


@pytest.mark.parametrize(
    "method, severity",
    [
        ("trace_with_guard", Severity.TRACE),
        ("debug_with_guard", Severity.DEBUG),
        ("information_with_guard", Severity.INFORMATION),
        ("warning_with_guard", Severity.WARNING),
        ("error_with_guard", Severity.ERROR),
        ("critical_with_guard", Severity.CRITICAL),
    ],
)
def test_guarded_methods_forward_severity(method, severity):
    recorder = _Recorder()
    guarded = _Guarded(recorder)
    assert getattr(guarded, method)("text") is guarded
    assert recorder.records == [("text", severity)]


def test_log_with_guard_without_logger_returns_self():
    guarded = _Guarded(None)
    result = LoggerGuardant.log_with_guard(guarded, "ignored", Severity.ERROR)
    assert result is guarded


def test_logger_can_be_attached_later():
    guarded = _Guarded(None)
    assert LoggerGuardant.warning_with_guard(guarded, "lost") is guarded
    recorder = _Recorder()
    guarded.target = recorder
    assert LoggerGuardant.warning_with_guard(guarded, "kept") is guarded
    assert recorder.records == [("kept", Severity.WARNING)]


def test_guardant_is_abstract():
    with pytest.raises(TypeError):
        LoggerGuardant()