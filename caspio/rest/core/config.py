"""Shared REST API constants.

This module centralizes the base URL layout, headers, and the query limits the
backend enforces so the client, query builder and pagination driver agree on
them.
"""

from __future__ import annotations

API_VERSION = "v2"

BASE_URL_TEMPLATE = "https://{account_id}.caspio.com/rest"

# Hard ceiling on rows returned by any list-type endpoint
PAGE_CEILING = 1000

DEFAULT_LIMIT = 100
DEFAULT_PAGE_NUMBER = 1
DEFAULT_PAGE_SIZE = 25

LIMIT_RANGE = (1, 1000)
PAGE_SIZE_RANGE = (5, 1000)
MIN_PAGE_NUMBER = 1

DEFAULT_TIMEOUT = 30.0

ACCOUNT_ID_ENV = "CASPIO_ACCOUNT_ID"
ACCESS_TOKEN_ENV = "CASPIO_ACCESS_TOKEN"
TIMEOUT_ENV = "CASPIO_TIMEOUT"


def get_base_url(account_id: str) -> str:
    """Get the REST base URL for an account.

    Args:
        account_id: Account ID taken from the web services profile token
            endpoint (``https://<account_id>.caspio.com/oauth/token``)

    Returns:
        Base URL string without a trailing slash

    Examples:
        >>> get_base_url("c1abc123")
        'https://c1abc123.caspio.com/rest'
    """
    if not account_id:
        raise ValueError("account_id must be a non-empty string")
    return BASE_URL_TEMPLATE.format(account_id=account_id)


def get_headers(access_token: str) -> dict[str, str]:
    """Build the headers sent with every JSON request."""
    return {
        "Authorization": f"bearer {access_token}",
        "Content-Type": "application/json",
        "Accept": "application/json",
    }
