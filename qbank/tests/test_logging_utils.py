import logging

from qbank.logging_utils import configure_logging


def _managed(logger):
    return [h for h in logger.handlers if getattr(h, "_qbank_managed_handler", False)]


def test_configure_logging_writes_file(tmp_path):
    log_path = tmp_path / "logs" / "qbank.log"

    configure_logging("INFO", log_file=log_path, include_console=False)
    logging.getLogger("qbank.pipeline.loader").info("loaded corpus")

    assert log_path.exists()
    assert "loaded corpus" in log_path.read_text(encoding="utf-8")
    assert "[INFO] qbank.pipeline.loader" in log_path.read_text(encoding="utf-8")


def test_configure_logging_replaces_previous_handlers(tmp_path):
    first_path = tmp_path / "first.log"
    second_path = tmp_path / "second.log"

    configure_logging(logging.INFO, log_file=first_path, include_console=False)
    logging.getLogger("qbank").info("first run entry")
    logger = configure_logging(logging.INFO, log_file=second_path, include_console=False)
    logging.getLogger("qbank").info("second run entry")

    assert len(_managed(logger)) == 1
    assert "second run entry" in second_path.read_text(encoding="utf-8")
    # Ensure the first log is not appended to after reconfiguration
    assert "second run entry" not in first_path.read_text(encoding="utf-8")


def test_configure_logging_level_names():
    logger = configure_logging("debug", include_console=True)

    assert logger.level == logging.DEBUG
    assert len(_managed(logger)) == 1
