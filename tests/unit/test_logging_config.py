"""
Tests pour configure_logging.
"""

import json
import sys

import pytest
from loguru import logger

from plexflix.logging_config import MASK, _mask_secrets, configure_logging


@pytest.fixture
def restore_logger():
    """Remet loguru dans son etat par defaut apres le test."""
    yield
    logger.remove()
    logger.configure(patcher=None)
    logger.add(sys.stderr)


class TestConfigureLogging:

    def test_file_sink_is_json(self, test_settings, restore_logger):
        configure_logging(test_settings)
        logger.remove()  # vide la file d'attente du sink fichier

        lines = test_settings.log_file.read_text().splitlines()
        records = [json.loads(line)["record"] for line in lines]

        assert records[-1]["message"] == "journalisation prete"
        assert records[-1]["extra"]["log_file"] == str(test_settings.log_file)

    def test_file_sink_keeps_only_plexflix_records(self, test_settings, restore_logger):
        configure_logging(test_settings)
        logger.info("hors application")
        logger.remove()

        assert "hors application" not in test_settings.log_file.read_text()


class TestMaskSecrets:

    def test_sensitive_fields_masked(self):
        record = {"extra": {"api_key": "rapid-key", "token": "plex-token", "title": "Heat"}}

        _mask_secrets(record)

        assert record["extra"] == {"api_key": MASK, "token": MASK, "title": "Heat"}

    def test_no_extra(self):
        record = {"extra": {}}

        _mask_secrets(record)

        assert record["extra"] == {}
