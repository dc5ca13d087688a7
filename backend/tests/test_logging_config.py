"""Unit tests for logging setup and the CLI's use of the configured level."""

from contextlib import redirect_stdout
import io
import json
import logging
from pathlib import Path
import sys
import tempfile
import unittest
from unittest.mock import patch


_BACKEND_DIR = Path(__file__).resolve().parent.parent
if str(_BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(_BACKEND_DIR))

from core.logging_config import resolve_level, setup_logging
from scripts import run_fraud_check


class ResolveLevelTests(unittest.TestCase):
    """Validate level name handling."""

    def test_names_are_case_insensitive(self) -> None:
        self.assertEqual(resolve_level("debug"), logging.DEBUG)
        self.assertEqual(resolve_level(" WARNING "), logging.WARNING)

    def test_integers_pass_through(self) -> None:
        self.assertEqual(resolve_level(logging.ERROR), logging.ERROR)

    def test_unknown_name_falls_back_to_info(self) -> None:
        with self.assertLogs("core.logging_config", level="WARNING"):
            self.assertEqual(resolve_level("verbose"), logging.INFO)


class SetupLoggingTests(unittest.TestCase):
    """Validate that the configured level reaches the root logger."""

    def setUp(self) -> None:
        root = logging.getLogger()
        self.addCleanup(root.setLevel, root.level)

    def test_level_applied_even_when_handlers_exist(self) -> None:
        setup_logging("ERROR")
        setup_logging("debug")
        self.assertEqual(logging.getLogger().level, logging.DEBUG)


class FraudCheckCliTests(unittest.TestCase):
    """Validate the command line entry point."""

    def _write(self, suffix: str, text: str) -> str:
        handle = tempfile.NamedTemporaryFile("w", suffix=suffix, delete=False, encoding="utf-8")
        with handle:
            handle.write(text)
        self.addCleanup(Path(handle.name).unlink)
        return handle.name

    def test_configured_log_level_is_used(self) -> None:
        config_path = self._write(".yml", "app:\n  log_level: debug\nfirebase:\n  enabled: false\n")
        input_path = self._write(
            ".json",
            json.dumps({"aadhaar": "123456789010", "name": "Suresh Oraon", "address": "Ranchi Kanke"}),
        )

        output = io.StringIO()
        with patch.object(run_fraud_check, "setup_logging") as setup, redirect_stdout(output):
            run_fraud_check.main([input_path, "--config", config_path])

        setup.assert_called_once_with("DEBUG")
        result = json.loads(output.getvalue())
        self.assertTrue(result["is_fraud"])
        self.assertEqual(result["reasons"], ["Suspicious Aadhaar number pattern detected"])


if __name__ == "__main__":
    unittest.main()
