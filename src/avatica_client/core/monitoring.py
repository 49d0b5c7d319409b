"""Sentry integration for error tracking and RPC tracing.

The library never initializes Sentry on its own. Applications that want
RPC spans and close-statement failures reported call setup_sentry() once
at startup, after setup_logging().
"""

import sentry_sdk

from avatica_client.__about__ import __version__


def setup_sentry(
    dsn: str | None,
    environment: str = "local",
    traces_sample_rate: float = 0.03,
) -> None:
    """Initialize Sentry. A None DSN leaves the SDK disabled."""
    sentry_sdk.init(
        dsn=dsn,
        traces_sample_rate=traces_sample_rate,
        environment=environment,
        release=f"avatica-client@{__version__}",
        attach_stacktrace=True,
        send_default_pii=False,
    )
