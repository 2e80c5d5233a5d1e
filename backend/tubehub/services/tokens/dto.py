# tubehub/services/tokens/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Output DTO with access and refresh tokens.

    :param access_token: Encoded access JWT.
    :type access_token: str
    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str
    :param access_expires: Access token lifetime (cookie ``Max-Age``).
    :type access_expires: timedelta
    :param refresh_expires: Refresh token lifetime (cookie ``Max-Age``).
    :type refresh_expires: timedelta
    """

    access_token: str
    refresh_token: str
    access_expires: timedelta
    refresh_expires: timedelta
