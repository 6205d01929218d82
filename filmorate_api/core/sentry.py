import logging

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration


def init_sentry(dsn: str, environment: str = "dev",
                release: str | None = None) -> bool:
    """Enable error reporting; returns False when no DSN is configured."""
    if not dsn:
        return False
    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        release=release,
        integrations=[
            # ERROR-записи уходят в Sentry событиями, INFO — хлебными крошками
            LoggingIntegration(level=logging.INFO,
                               event_level=logging.ERROR),
            FastApiIntegration(),
            SqlalchemyIntegration(),
        ],
        traces_sample_rate=0.2,
        send_default_pii=False,
    )
    return True
