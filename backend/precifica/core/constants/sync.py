"""
Sync constants — remote file store and local storage keys.
"""

DEFAULT_REMOTE_PATH: str = "precifica_db.json"

GITHUB_SERVICE_NAME: str = "GitHub"
GITHUB_ACCEPT_HEADER: str = "application/vnd.github.v3+json"

# Prefix of the commit message written on every push
COMMIT_MESSAGE_PREFIX: str = "Update Precifica Data"

# Local storage keys (same names the browser build used in localStorage)
PRODUCTS_KEY: str = "precifica_products"
PLATING_FACTOR_KEY: str = "platingFactor"
GITHUB_TOKEN_KEY: str = "gh_token"
GITHUB_OWNER_KEY: str = "gh_owner"
GITHUB_REPO_KEY: str = "gh_repo"
GITHUB_PATH_KEY: str = "gh_path"
GITHUB_SHA_KEY: str = "gh_sha"
LAST_SYNC_HASH_KEY: str = "last_sync_hash"
LAST_SYNC_AT_KEY: str = "last_sync_at"
