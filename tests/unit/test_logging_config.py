import logging

from cache_universe.logging_config import setup_logging


def test_setup_logging_is_idempotent() -> None:
    root = logging.getLogger()
    before = list(root.handlers)
    try:
        setup_logging(logging.DEBUG)
        setup_logging(logging.INFO)
        ours = [h for h in root.handlers if getattr(h, "_cache_universe", False)]
        assert len(ours) == 1
        assert ours[0].level == logging.INFO
        assert root.level == logging.INFO
    finally:
        for handler in list(root.handlers):
            if handler not in before:
                root.removeHandler(handler)
        if hasattr(root, "_cache_universe_handler_installed"):
            del root._cache_universe_handler_installed  # type: ignore[attr-defined]
