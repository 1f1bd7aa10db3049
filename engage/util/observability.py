"""Observability configuration using Logfire.

Usage:
    import logfire

    # Structured logging
    logfire.info("Reaction applied", target_id=target.target_id, type=type)

    # Manual spans around network boundaries
    with logfire.span("thread.load_page", page=page):
        ...
"""

from typing import Any

import logfire

from engage.config import Settings
from engage.util.error import ConfigurationError


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for observability.

    Token Configuration:
    - Set OBSERVABILITY__LOGFIRE_TOKEN to enable cloud sending
    - If a token is present, logs are sent to Logfire cloud by default
    - Can be explicitly controlled with OBSERVABILITY__SEND_TO_LOGFIRE

    Args:
        settings: Engine settings

    Raises:
        ConfigurationError: If cloud sending is forced without a token
    """
    # Priority: explicit setting > token presence > default (False)
    if (
        settings.observability.send_to_logfire
        and not settings.observability.logfire_token
    ):
        raise ConfigurationError(
            "OBSERVABILITY__SEND_TO_LOGFIRE is set but no Logfire token is configured"
        )
    if settings.observability.send_to_logfire is not None:
        send_to_logfire = settings.observability.send_to_logfire
    elif settings.observability.logfire_token:
        send_to_logfire = True
    else:
        send_to_logfire = False

    config_kwargs: dict[str, Any] = {
        "service_name": "engage-client",
        "service_version": "0.1.0",
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    }

    if settings.observability.logfire_token:
        config_kwargs["token"] = settings.observability.logfire_token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        debug=settings.debug,
        send_to_logfire=send_to_logfire,
        has_token=bool(settings.observability.logfire_token),
    )


def instrument_httpx() -> None:
    """Instrument httpx with Logfire.

    Traces every outbound API request with its latency and status.
    """
    logfire.instrument_httpx()
    logfire.info("httpx instrumented")
