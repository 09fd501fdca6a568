from __future__ import annotations

import logging

from codeplex_discussions.run_logging import PACKAGE_LOGGER, configure_run_logging


def test_log_file_is_appended_across_runs_and_released(tmp_path):
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    handlers_before = list(package_logger.handlers)

    with configure_run_logging(tmp_path, "run.log"):
        logging.getLogger("codeplex_discussions.discussion_crawler").warning("first run")
    with configure_run_logging(tmp_path, "run.log"):
        logging.getLogger("codeplex_discussions.discussion_crawler").warning("second run")

    lines = (tmp_path / "run.log").read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert lines[0].endswith("first run")
    assert lines[1].endswith("second run")
    assert package_logger.handlers == handlers_before


def test_no_log_file_when_name_is_empty(tmp_path, capsys):
    with configure_run_logging(tmp_path / "out", None):
        logging.getLogger("codeplex_discussions.http_client").error("console only")

    assert "console only" in capsys.readouterr().out
    assert not (tmp_path / "out").exists()
