"""
Tests for the loguru setup helper.
"""

from godunov2d.utils import setup_logging


def test_log_file_receives_records(tmp_path):
    log_file = tmp_path / "run.log"
    logger = setup_logging(level="DEBUG", show_time=False, log_file=str(log_file))
    try:
        logger.debug("sweep order x,y")
        logger.complete()
    finally:
        setup_logging()
    text = log_file.read_text()
    assert "DEBUG" in text
    assert "sweep order x,y" in text
