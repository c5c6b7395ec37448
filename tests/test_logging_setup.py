import logging

from src.tasks_api.logging_setup import _ConsoleNoiseFilter, setup_logging


def record(name, level):
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_noise_filter():
    f = _ConsoleNoiseFilter()
    assert f.filter(record("src.tasks_api.repositories", logging.DEBUG))
    assert f.filter(record("src.tasks_client.client", logging.INFO))
    assert not f.filter(record("uvicorn.access", logging.ERROR))
    assert f.filter(record("uvicorn.error", logging.INFO))
    assert not f.filter(record("httpx", logging.INFO))
    assert f.filter(record("httpx", logging.WARNING))


def test_setup_logging_installs_one_handler():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        setup_logging(console_level=logging.DEBUG)
        setup_logging(console_level=logging.DEBUG)
        assert len(root.handlers) == 1
        assert root.level == logging.DEBUG
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
        logging.captureWarnings(False)
