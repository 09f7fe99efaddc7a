"""API Key authentication."""
from __future__ import annotations

import hashlib
import hmac
import os

from metacheck.config.settings import settings

API_KEY_ENV = "METACHECK_API_KEY"


class APIKeyManager:
    """Manage API keys loaded from the environment.

    Keys are read from ``METACHECK_API_KEY`` as a comma-separated list:
        METACHECK_API_KEY=abc123xyz
        METACHECK_API_KEY=abc123xyz,def456uvw

    When no key is configured the API is open and any presented key is
    ignored. When at least one key is configured every request must carry
    a valid one.
    """

    def __init__(self):
        self._key_hashes: list[bytes] = []
        self._load_keys()

    def _load_keys(self) -> None:
        """Load API keys from environment variables."""
        raw = os.getenv(API_KEY_ENV, "")
        self._key_hashes = [
            self._hash_key(key.strip()) for key in raw.split(",") if key.strip()
        ]

    @staticmethod
    def _hash_key(api_key: str) -> bytes:
        """Hash an API key so comparisons run on fixed-length digests."""
        return hashlib.sha256(api_key.encode()).digest()

    def fingerprint(self, api_key: str) -> str:
        """Short non-reversible identifier for a key."""
        return self._hash_key(api_key).hex()[:16]

    @property
    def auth_required(self) -> bool:
        return bool(self._key_hashes)

    def validate(self, api_key: str | None) -> bool:
        """Check a key against every configured key in constant time."""
        if not api_key:
            return False
        candidate = self._hash_key(api_key)
        matched = False
        for key_hash in self._key_hashes:
            matched |= hmac.compare_digest(candidate, key_hash)
        return matched

    def get_rate_limit(self, api_key: str | None) -> int:
        """Get rate limit for the given key (or anonymous default)."""
        if api_key and self.validate(api_key):
            return settings.api.authenticated_rate_limit
        return settings.api.anonymous_rate_limit

    def reload(self) -> None:
        """Reload keys from environment (for testing/hot reload)."""
        self._load_keys()


# Global instance
api_key_manager = APIKeyManager()
