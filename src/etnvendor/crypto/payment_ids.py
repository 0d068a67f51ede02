from __future__ import annotations

import secrets

from ..domain.constants import PAYMENT_ID_BYTES
from ..domain.errors import RandomSourceUnavailable


def generate_payment_id() -> str:
    """Return a new payment id: 5 CSPRNG bytes as 10 lowercase hex characters.

    Raises:
        RandomSourceUnavailable: If the operating system entropy source
            cannot be read. There is no fallback to a non-cryptographic
            generator.
    """
    try:
        return secrets.token_bytes(PAYMENT_ID_BYTES).hex()
    except (OSError, NotImplementedError) as e:
        raise RandomSourceUnavailable(
            f"Could not read the platform random source: {e}"
        ) from e
