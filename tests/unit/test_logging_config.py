"""
Tests pour configure_logging (handlers loguru).
"""

import json
from pathlib import Path

import pytest
from loguru import logger

from movieviewer.logging_config import configure_logging


@pytest.fixture(autouse=True)
def restore_logger():
    yield
    logger.remove()


class TestConfigureLogging:
    """Tests des sorties console et fichier."""

    def test_file_sink_writes_json(self, tmp_path: Path):
        log_file = tmp_path / "logs" / "movieviewer.log"

        configure_logging(log_level="warning", log_file=log_file)
        logger.debug("cache de 3 films")
        logger.remove()  # vide la file d'attente enqueue

        records = [json.loads(line) for line in log_file.read_text().splitlines()]
        messages = [r["record"]["message"] for r in records]
        assert "cache de 3 films" in messages

    def test_console_only(self, tmp_path: Path, capsys: pytest.CaptureFixture):
        configure_logging(log_level="INFO", log_file=None)
        logger.info("mode hors-ligne")
        logger.debug("ignore")

        err = capsys.readouterr().err
        assert "mode hors-ligne" in err
        assert "ignore" not in err
        assert list(tmp_path.iterdir()) == []
