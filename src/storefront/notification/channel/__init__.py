"""Email channel registry — pluggable outbound email adapters.

Provides singleton access to the email adapter. Uses the fake adapter by
default; ``EMAIL_BACKEND=smtp`` selects the SMTP adapter configured from the
``SMTP_*`` environment variables.
"""

import os

_channel_instances: dict[str, object] = {}

EMAIL = "Email"


def get_email_channel():
    """Return the configured email adapter (singleton)."""
    if EMAIL not in _channel_instances:
        backend = os.getenv("EMAIL_BACKEND", "fake").lower()
        if backend == "fake":
            from storefront.notification.channel.fake_email import FakeEmailAdapter

            _channel_instances[EMAIL] = FakeEmailAdapter()
        elif backend == "smtp":
            from storefront.notification.channel.smtp_email import SmtpEmailAdapter

            _channel_instances[EMAIL] = SmtpEmailAdapter.from_env()
        else:
            raise ValueError(f"Unknown email backend: {backend}")

    return _channel_instances[EMAIL]


def reset_channels():
    """Reset channel singletons (useful for testing)."""
    _channel_instances.clear()
