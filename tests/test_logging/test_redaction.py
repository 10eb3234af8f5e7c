"""
Tests for credential redaction.
"""

import json
import logging

import pytest

from vk.graphql.transport import payload_snippet
from vk.logging.filters import REDACTED, SensitiveDataFilter, is_sensitive_key, redact_sensitive


class TestRedactSensitive:
    """Test key-based redaction of JSON values."""

    @pytest.mark.parametrize(
        "key",
        ["token", "Authorization", "password", "api_key", "access_token", "credentials", "private_key"],
    )
    def test_sensitive_keys(self, key):
        assert is_sensitive_key(key)
        assert redact_sensitive({key: "value"}) == {key: REDACTED}

    def test_ordinary_keys_kept(self):
        assert not is_sensitive_key("owner")
        assert redact_sensitive({"owner": "octo", "number": 7}) == {"owner": "octo", "number": 7}

    def test_nested_values(self):
        """Test that objects inside objects and arrays are redacted."""
        payload = {
            "query": "mutation M { x }",
            "variables": {
                "input": {"secret": {"nested": True}, "name": "n"},
                "items": [{"token": 1}, {"value": 2}, "plain"],
            },
        }

        result = redact_sensitive(payload)

        assert result["variables"]["input"] == {"secret": REDACTED, "name": "n"}
        assert result["variables"]["items"] == [{"token": REDACTED}, {"value": 2}, "plain"]

    def test_input_not_modified(self):
        payload = {"variables": {"password": "hunter2"}}
        redact_sensitive(payload)
        assert payload == {"variables": {"password": "hunter2"}}

    def test_scalars_unchanged(self):
        assert redact_sensitive("token") == "token"
        assert redact_sensitive(None) is None


class TestPayloadSnippet:
    """Test request snippets used in transport errors."""

    def test_redacted(self):
        text = payload_snippet({"variables": {"token": "abc", "n": 1}})
        assert json.loads(text) == {"variables": {"token": REDACTED, "n": 1}}

    def test_truncated(self):
        text = payload_snippet({"query": "x" * 2000})
        assert len(text) == 1024 + 3
        assert text.endswith("...")


class TestSensitiveDataFilter:
    """Test masking of credentials in log records."""

    def make_record(self, msg, *args):
        return logging.LogRecord(
            name="vk.test",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg=msg,
            args=args,
            exc_info=None,
        )

    def test_masks_github_token(self):
        record = self.make_record("using %s", "ghp_" + "a" * 36)

        assert SensitiveDataFilter().filter(record)

        assert "ghp_" not in record.getMessage()
        assert "***MASKED***" in record.getMessage()

    def test_masks_bearer_value(self):
        record = self.make_record("Authorization: Bearer abcdefgh12345678")
        SensitiveDataFilter().filter(record)
        assert record.getMessage() == "Authorization: Bearer ***MASKED***"

    def test_masks_key_value_pairs(self):
        record = self.make_record('{"password": "hunter2"}')
        SensitiveDataFilter().filter(record)
        assert "hunter2" not in record.getMessage()

    def test_leaves_plain_messages(self):
        record = self.make_record("retrying %s", "ReviewThreads")
        SensitiveDataFilter().filter(record)
        assert record.args == ("ReviewThreads",)
