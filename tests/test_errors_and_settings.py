import os
import unittest
from unittest.mock import patch

from discovery.config import Settings, get_settings
from discovery.errors import (
    NotFoundError,
    ValidationError,
    validate_object_id,
    validate_range,
    validate_text,
)
from discovery.logging_config import configure_logging


class ErrorTests(unittest.TestCase):
    def test_not_found_payload(self) -> None:
        error = NotFoundError("Product", "a" * 24)
        self.assertEqual(error.error_code, "NOT_FOUND")
        self.assertEqual(error.to_dict()["message"], f"Product '{'a' * 24}' not found")

    def test_validation_error_payload(self) -> None:
        payload = ValidationError("bad", details={"field": "limit"}).to_dict()
        self.assertEqual(payload, {"code": "VALIDATION_ERROR", "message": "bad", "details": {"field": "limit"}})

    def test_object_id_validation(self) -> None:
        self.assertEqual(validate_object_id("0123456789abcdefABCDEF01"), "0123456789abcdefABCDEF01")
        for bad in ("", "xyz", "0" * 23, "0" * 25, "g" * 24, 12, None):
            with self.assertRaises(ValidationError):
                validate_object_id(bad, "user")

    def test_range_validation(self) -> None:
        self.assertEqual(validate_range(5, "limit", 1, 10), 5)
        for bad in (0, 11, True, 2.5, "3"):
            with self.assertRaises(ValidationError):
                validate_range(bad, "limit", 1, 10)

    def test_text_validation(self) -> None:
        self.assertEqual(validate_text("shawl", "query"), "shawl")
        self.assertEqual(validate_text(None, "query"), "")
        for bad in (123, 4.5, ["shawl"], b"shawl"):
            with self.assertRaises(ValidationError):
                validate_text(bad, "query")


class SettingsTests(unittest.TestCase):
    def test_defaults(self) -> None:
        settings = Settings()
        self.assertEqual(settings.max_page_size, 100)
        self.assertEqual(settings.suggestion_default_limit, 10)
        self.assertEqual(settings.max_query_tokens, 32)

    def test_environment_overrides(self) -> None:
        with patch.dict(os.environ, {"DISCOVERY_MAX_PAGE_SIZE": "25", "DISCOVERY_DEFAULT_LANGUAGE": "ne"}):
            settings = Settings()
        self.assertEqual(settings.max_page_size, 25)
        self.assertEqual(settings.default_language, "ne")

    def test_get_settings_is_cached(self) -> None:
        self.assertIs(get_settings(), get_settings())

    def test_configure_logging_accepts_both_renderers(self) -> None:
        configure_logging("DEBUG", json_logs=False)
        configure_logging("INFO", json_logs=True)


if __name__ == "__main__":
    unittest.main()
