import json
import logging

from toilet_finder.common.errors import ConfigError, DiscoveryError, ToiletFinderError
from toilet_finder.common.http import HttpRequestError
from toilet_finder.common.logging import JsonLineFormatter, build_logger
from toilet_finder.common.time_utils import utc_timestamp_iso


def test_error_codes_and_hierarchy():
    for error_type in (ConfigError, DiscoveryError, HttpRequestError):
        assert issubclass(error_type, ToiletFinderError)
    assert DiscoveryError.error_code == "DISCOVERY_ERROR"
    assert HttpRequestError.error_code == "HTTP_ERROR"


def test_json_formatter_emits_stable_fields():
    record = logging.LogRecord("toilet_finder", logging.INFO, __file__, 1, "done", None, None)
    record.operation = "find_toilets"
    record.rows_out = 3

    payload = json.loads(JsonLineFormatter().format(record))

    assert payload["message"] == "done"
    assert payload["operation"] == "find_toilets"
    assert payload["rows_out"] == 3
    assert payload["error_code"] is None
    assert payload["level"] == "INFO"


def test_build_logger_writes_json_lines_file(tmp_path):
    log_path = tmp_path / "logs" / "run.log.jsonl"
    logger = build_logger("INFO", log_path=log_path)
    logger.info("hello", extra={"event": "TEST"})
    for handler in logger.handlers:
        handler.flush()

    line = log_path.read_text(encoding="utf-8").strip().splitlines()[-1]
    assert json.loads(line)["event"] == "TEST"


def test_utc_timestamp_is_iso_with_offset():
    assert utc_timestamp_iso().endswith("+00:00")
