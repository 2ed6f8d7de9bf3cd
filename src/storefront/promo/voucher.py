"""Voucher code generation.

A code looks like ``pashudh-Ab3dE9-19102026``: the configured prefix, six
random alphanumeric characters, and the issue date as ddmmyyyy.
"""

import re
import secrets
import string
from datetime import UTC, datetime

CODE_ALPHABET = string.ascii_letters + string.digits
CODE_LENGTH = 6
MAX_ATTEMPTS = 10


def generate_voucher_code(prefix: str, today: datetime | None = None) -> str:
    today = today or datetime.now(UTC)
    body = "".join(secrets.choice(CODE_ALPHABET) for _ in range(CODE_LENGTH))
    return f"{prefix}{body}-{today.strftime('%d%m%Y')}"


def voucher_pattern(prefix: str) -> re.Pattern:
    return re.compile(rf"^{re.escape(prefix)}[A-Za-z0-9]{{{CODE_LENGTH}}}-\d{{8}}$")


def unique_voucher_code(prefix: str, is_taken) -> str:
    """Generate codes until `is_taken(code)` is false.

    Raises:
        RuntimeError: if every attempt collided.
    """
    for _ in range(MAX_ATTEMPTS):
        code = generate_voucher_code(prefix)
        if not is_taken(code):
            return code
    raise RuntimeError(f"Could not generate a unique voucher code after {MAX_ATTEMPTS} attempts")
