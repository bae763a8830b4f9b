import logging

from enginekit.logger import log


def test_log_emits_debug_record(caplog):
    with caplog.at_level(logging.DEBUG, logger="enginekit.logger"):
        log("hello frame")
    assert caplog.records[-1].getMessage() == "hello frame"
    assert caplog.records[-1].levelno == logging.DEBUG


def test_log_does_not_interpret_percent_signs(caplog):
    with caplog.at_level(logging.DEBUG, logger="enginekit.logger"):
        log("100% %s done")
    assert caplog.records[-1].getMessage() == "100% %s done"