"""Email adapter registry.

get_mailer() builds the adapter named by EMAIL_ADAPTER on first use
(only "fake" ships in-tree); set_mailer() injects another implementation,
reset_mailer() drops the current one.
"""

import os

from storefront.notification.email_port import EmailPort

_current_mailer: EmailPort | None = None


def _build_mailer() -> EmailPort:
    adapter = os.environ.get("EMAIL_ADAPTER", "fake")
    if adapter == "fake":
        from storefront.notification.fake_email import FakeEmailAdapter

        return FakeEmailAdapter()
    raise ValueError(f"Unknown email adapter: {adapter}")


def get_mailer() -> EmailPort:
    global _current_mailer
    if _current_mailer is None:
        _current_mailer = _build_mailer()
    return _current_mailer


def set_mailer(mailer: EmailPort) -> None:
    global _current_mailer
    _current_mailer = mailer


def reset_mailer() -> None:
    global _current_mailer
    _current_mailer = None
