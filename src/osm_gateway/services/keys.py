"""Cache key generation for request-addressed caching."""

import hashlib


def cache_key(endpoint: str, body: str) -> str:
    """Derive the cache key of an upstream request.

    The key is the MD5 hex digest of the endpoint and the serialized
    request body, so it is stable across runs and safe to use as a file
    name.

    Args:
        endpoint: Target URL of the request
        body: Serialized request body (empty for GET requests)

    Returns:
        32-character lowercase hex string
    """
    # The separator keeps ("ab", "c") and ("a", "bc") apart.
    payload = f"{endpoint}\n{body}".encode("utf-8")
    return hashlib.md5(payload).hexdigest()
