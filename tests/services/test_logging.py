from __future__ import annotations

import json
import logging

from credctl.services.logging import setup_logging


def test_level_names_are_case_insensitive():
    logger = setup_logging("debug")
    assert logger.level == logging.DEBUG


def test_unknown_level_falls_back_to_warning():
    logger = setup_logging("chatty")
    assert logger.level == logging.WARNING


def test_handlers_are_replaced_on_reconfigure():
    setup_logging("info")
    logger = setup_logging("info")
    assert len(logger.handlers) == 1
    assert logger.propagate is False


def test_json_lines_to_rotating_file(tmp_path):
    log_file = tmp_path / "logs" / "credctl.log"
    setup_logging("info", json_format=True, log_file=log_file)

    logging.getLogger("credctl.services.crypto.pki").info("wrote %s", "realm_private.pem")
    for handler in logging.getLogger("credctl").handlers:
        handler.flush()

    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    payload = json.loads(lines[0])
    assert payload["level"] == "INFO"
    assert payload["logger"] == "credctl.services.crypto.pki"
    assert payload["msg"] == "wrote realm_private.pem"
