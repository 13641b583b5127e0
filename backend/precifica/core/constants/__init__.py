"""
Constants package — re-exports from domain-specific modules.

Usage:
    from precifica.core.constants.pricing import TROY_OUNCE_GRAMS
    # or import everything:
    from precifica.core.constants import pricing, sync
"""

from precifica.core.constants import pricing, sync
from precifica.core.constants.pricing import (
    TROY_OUNCE_GRAMS,
    DEFAULT_PLATING_FACTOR,
    DEFAULT_MARKUP_PERCENT,
    NUMERIC_FIELDS,
    TEXT_FIELDS,
    PLATING_COST_FIELD,
    EDITABLE_FIELDS,
    SEARCH_FIELDS,
)
from precifica.core.constants.sync import (
    DEFAULT_REMOTE_PATH,
    GITHUB_SERVICE_NAME,
    GITHUB_ACCEPT_HEADER,
    COMMIT_MESSAGE_PREFIX,
    PRODUCTS_KEY,
    PLATING_FACTOR_KEY,
    GITHUB_TOKEN_KEY,
    GITHUB_OWNER_KEY,
    GITHUB_REPO_KEY,
    GITHUB_PATH_KEY,
    GITHUB_SHA_KEY,
    LAST_SYNC_HASH_KEY,
    LAST_SYNC_AT_KEY,
)

__all__ = [
    "pricing",
    "sync",
    "TROY_OUNCE_GRAMS",
    "DEFAULT_PLATING_FACTOR",
    "DEFAULT_MARKUP_PERCENT",
    "NUMERIC_FIELDS",
    "TEXT_FIELDS",
    "PLATING_COST_FIELD",
    "EDITABLE_FIELDS",
    "SEARCH_FIELDS",
    "DEFAULT_REMOTE_PATH",
    "GITHUB_SERVICE_NAME",
    "GITHUB_ACCEPT_HEADER",
    "COMMIT_MESSAGE_PREFIX",
    "PRODUCTS_KEY",
    "PLATING_FACTOR_KEY",
    "GITHUB_TOKEN_KEY",
    "GITHUB_OWNER_KEY",
    "GITHUB_REPO_KEY",
    "GITHUB_PATH_KEY",
    "GITHUB_SHA_KEY",
    "LAST_SYNC_HASH_KEY",
    "LAST_SYNC_AT_KEY",
]
