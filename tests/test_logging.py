import logging

import pytest
import structlog

from botctx.logging import get_logger, redact_token_processor, setup_logging


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


class TestRedactTokenProcessor:
    def test_redacts_bot_token(self) -> None:
        event = {
            "event": "https://api.telegram.org/bot123456789:ABCdefGHI_jkl/sendMessage"
        }

        result = redact_token_processor(None, "info", event)

        assert "123456789" not in result["event"]
        assert "bot[REDACTED]" in result["event"]

    def test_redacts_bare_token(self) -> None:
        event = {"event": "Token is 123456789:ABCDEFGHIJ_klmnop"}

        result = redact_token_processor(None, "info", event)

        assert "123456789" not in result["event"]
        assert "[REDACTED_TOKEN]" in result["event"]

    def test_redacts_other_string_fields(self) -> None:
        event = {
            "event": "client.network_error",
            "error": "failed to reach https://api.telegram.org/bot1:secret_token/getMe",
            "status": 502,
        }

        result = redact_token_processor(None, "warning", event)

        assert result["event"] == "client.network_error"
        assert result["error"] == "failed to reach https://api.telegram.org/bot[REDACTED]/getMe"
        assert result["status"] == 502

    def test_no_token_unchanged(self) -> None:
        event = {"event": "context.dispatch", "operation": "editMessageText"}

        result = redact_token_processor(None, "debug", event)

        assert result == {"event": "context.dispatch", "operation": "editMessageText"}


@pytest.mark.parametrize("debug", [True, False])
def test_setup_logging_sets_level(debug: bool) -> None:
    setup_logging(debug=debug)

    expected = logging.DEBUG if debug else logging.INFO
    assert logging.getLogger().level == expected
    assert logging.getLogger("httpx").level == logging.WARNING


def test_json_output_is_redacted(capsys) -> None:
    setup_logging(debug=False)

    get_logger("botctx.test").info("calling bot42:abcdefghijklmnop/getMe")

    err = capsys.readouterr().err
    assert "abcdefghijklmnop" not in err
    assert "bot[REDACTED]" in err
