"""Tests for Sentry setup."""

from unittest.mock import patch

import pytest

from avatica_client import __version__
from avatica_client.core.monitoring import setup_sentry


@pytest.mark.unit
def test_setup_sentry_passes_release_and_environment():
    with patch("avatica_client.core.monitoring.sentry_sdk.init") as init:
        setup_sentry("https://key@example.invalid/1", environment="staging")

    kwargs = init.call_args.kwargs
    assert kwargs["dsn"] == "https://key@example.invalid/1"
    assert kwargs["environment"] == "staging"
    assert kwargs["release"] == f"avatica-client@{__version__}"
    assert kwargs["send_default_pii"] is False


@pytest.mark.unit
def test_setup_sentry_without_dsn():
    with patch("avatica_client.core.monitoring.sentry_sdk.init") as init:
        setup_sentry(None)

    assert init.call_args.kwargs["dsn"] is None
