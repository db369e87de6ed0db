"""Tests for the uvicorn entry point."""

from unittest.mock import patch

from stockroom import __main__ as entrypoint
from stockroom.config import settings


def test_main_serves_the_app_on_the_configured_address():
    with patch.object(entrypoint.uvicorn, "run") as run:
        entrypoint.main()

    run.assert_called_once()
    (target,), options = run.call_args
    assert target == "stockroom.main:app"
    assert options["host"] == settings.api_host
    assert options["port"] == settings.api_port
    assert options["log_level"] == settings.log_level.lower()
