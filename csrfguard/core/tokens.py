"""Token derivation for session-bound CSRF tokens.

``issue_token`` keeps the clock-plus-secret scheme: the token is the SHA-256
hex digest of the secret concatenated with the current UTC instant. Its
unpredictability rests on clock granularity and the secrecy of the secret.
``issue_random_token`` is the hardened alternative and draws its input from
``secrets`` instead of the clock.
"""

import hashlib
import hmac
import secrets
from datetime import datetime, timezone
from typing import Callable, Dict, Optional

TokenIssuer = Callable[[str], str]


def issue_token(secret: str, instant: Optional[datetime] = None) -> str:
    """Return the hex SHA-256 digest of ``secret`` followed by ``instant``."""
    if instant is None:
        instant = datetime.now(timezone.utc)
    material = f"{secret}{instant.isoformat(timespec='microseconds')}"
    return hashlib.sha256(material.encode("utf-8")).hexdigest()


def issue_random_token(secret: str) -> str:
    """Return an HMAC-SHA-256 of a random nonce keyed with ``secret``."""
    nonce = secrets.token_bytes(32)
    return hmac.new(secret.encode("utf-8"), nonce, hashlib.sha256).hexdigest()


TOKEN_ISSUERS: Dict[str, TokenIssuer] = {
    "clock": issue_token,
    "random": issue_random_token,
}


def get_issuer(source: str) -> TokenIssuer:
    try:
        return TOKEN_ISSUERS[source]
    except KeyError:
        raise ValueError(f"Unknown CSRF token source: {source!r}") from None
