import json
import logging
import unittest

from criterion_table.model.raw import read_raw_records
from criterion_table.util.logging import log_event, log_structured_event


class _CaptureHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.messages = []

    def emit(self, record):
        self.messages.append(record.getMessage())


def _capture(name):
    logger = logging.getLogger(name)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    handler = _CaptureHandler()
    logger.handlers = [handler]
    return logger, handler


class TestStructuredLogging(unittest.TestCase):
    def test_log_structured_event_emits_json_message(self):
        logger, handler = _capture("criterion_table.tests.structured_logging")

        payload = log_structured_event(
            logger,
            logging.INFO,
            "table_set_built",
            tables=2,
            rows=5,
            error_kind=None,
        )
        self.assertEqual(payload, {"event": "table_set_built", "tables": 2, "rows": 5})
        self.assertEqual(len(handler.messages), 1)

        decoded = json.loads(handler.messages[0])
        self.assertEqual(decoded["event"], "table_set_built")
        self.assertEqual(decoded["tables"], 2)
        self.assertNotIn("error_kind", decoded)

    def test_log_structured_event_keeps_fields_verbatim(self):
        logger, handler = _capture("criterion_table.tests.structured_logging.verbatim")

        payload = log_structured_event(logger, logging.INFO, "tables_config_loaded", path="tables.toml", token_table="Auth")

        self.assertEqual(payload, {"event": "tables_config_loaded", "path": "tables.toml", "token_table": "Auth"})
        self.assertEqual(json.loads(handler.messages[0]), payload)

    def test_log_structured_event_truncates_large_strings(self):
        logger, handler = _capture("criterion_table.tests.structured_logging.truncation")

        huge = "x" * 3000
        payload = log_structured_event(logger, logging.INFO, "big_payload", preview=huge)

        self.assertLess(len(payload["preview"]), len(huge))
        self.assertTrue(payload["preview"].endswith("...<truncated>"))
        self.assertEqual(json.loads(handler.messages[0])["preview"], payload["preview"])

    def test_log_event_skips_disabled_levels(self):
        logger, handler = _capture("criterion_table.tests.structured_logging.guarded")

        log_event(logger, "quiet", level=logging.DEBUG, rows=1)
        log_event(logger, "loud", rows=2)

        self.assertEqual(len(handler.messages), 1)
        self.assertEqual(json.loads(handler.messages[0]), {"event": "loud", "rows": 2})

    def test_records_read_event(self):
        logger, handler = _capture("criterion_table.model.raw")
        try:
            read_raw_records(
                '{"id": "T/C/r", "typical": {"estimate": 1.0, "unit": "ns"}}\n'
                '{"group_name": "T", "benchmarks": ["T/C/r"]}\n'
            )
        finally:
            logger.handlers = []
            logger.setLevel(logging.NOTSET)
            logger.propagate = True

        decoded = json.loads(handler.messages[-1])
        self.assertEqual(decoded, {"event": "records_read", "benchmarks": 1, "groups": 1})


if __name__ == "__main__":
    unittest.main()
