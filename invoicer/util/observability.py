"""Observability configuration using Logfire.

Usage:
    import logfire

    logfire.info("Invite validated", token=redact(token), state=state.value)

    with logfire.span("accept_invite.execute", public=True):
        ...

Invite tokens and authorization codes are bearer credentials: only ever
log the first 8 characters.
"""

import logfire

from invoicer.config import Settings


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for the client.

    Token Configuration:
    - Set OBSERVABILITY__LOGFIRE_TOKEN to enable cloud sending
    - Can be explicitly controlled with OBSERVABILITY__SEND_TO_LOGFIRE

    Args:
        settings: Client settings
    """
    # Priority: explicit setting > token presence > default (False)
    if settings.observability.send_to_logfire is not None:
        send_to_logfire = settings.observability.send_to_logfire
    elif settings.observability.logfire_token:
        send_to_logfire = True
    else:
        send_to_logfire = False

    config_kwargs = {
        "service_name": "invoicer-client",
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
    """Instrument httpx so every backend call is traced.

    Must run after configure_logfire().
    """
    logfire.instrument_httpx()
    logfire.info("httpx instrumented")


def redact(secret: str | None) -> str:
    """Shorten a token or code for log output."""
    if not secret:
        return "<none>"
    return secret[:8] + "..."
