"""
HTTP session with connection pooling, automatic retry, and CA bundle selection.

Both change searches of a cycle share one session from two worker threads,
so the pool holds two connections.
"""

import os

import certifi
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .constants import (
    CHECK_VERSION, HTTP_POOL_SIZE, RETRY_TOTAL, RETRY_BACKOFF_FACTOR,
    RETRY_STATUS_FORCELIST,
)
from .config import log

_retry_strategy = Retry(
    total=RETRY_TOTAL,
    backoff_factor=RETRY_BACKOFF_FACTOR,        # Wait 1s, 2s, 4s between retries
    status_forcelist=list(RETRY_STATUS_FORCELIST),
    allowed_methods=["GET"],
    raise_on_status=False,                      # Hand the last response back; api.py reports it
)


def _get_ca_bundle():
    """Env override (REQUESTS_CA_BUNDLE / SSL_CERT_FILE) first, then certifi."""
    env_ca = os.environ.get("REQUESTS_CA_BUNDLE") or os.environ.get("SSL_CERT_FILE")
    if env_ca and os.path.isfile(env_ca):
        return env_ca
    return certifi.where()


def create_session():
    """Create a new requests.Session with connection pooling, retry, and SSL."""
    session = requests.Session()
    adapter = HTTPAdapter(
        pool_connections=1,
        pool_maxsize=HTTP_POOL_SIZE,
        max_retries=_retry_strategy,
    )
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.verify = _get_ca_bundle()
    session.headers.update({
        "Accept": "application/json",
        "User-Agent": f"gerrit-check/{CHECK_VERSION}",
    })
    return session


def reset_session(session):
    """Close and recreate the HTTP session (fixes stale connections)."""
    try:
        session.close()
    except requests.RequestException as e:
        log.debug("Session close failed: %s", e)
    return create_session()
