"""Backend reachability probe."""

import base64

import httpx
import structlog

from logsource.errors import BackendUnhealthyError, TransportError

HEALTH_PATH = "/_cat/health"
HEALTH_TIMEOUT_SECONDS = 10.0

logger = structlog.get_logger()


def basic_auth_header(username: str, password: str) -> str:
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


def check_health(
    url: str,
    *,
    username: str = "",
    password: str = "",
    verify: bool = True,
    timeout: float = HEALTH_TIMEOUT_SECONDS,
) -> bool:
    """Return True iff the cluster health endpoint answers with status 200."""

    headers: dict[str, str] = {}
    if username:
        headers["Authorization"] = basic_auth_header(username, password)

    endpoint = f"{url.rstrip('/')}{HEALTH_PATH}"
    try:
        with httpx.Client(timeout=timeout, verify=verify) as client:
            response = client.get(endpoint, headers=headers)
    except httpx.TransportError as exc:
        logger.warning("es_health_check_unreachable", url=url, error=str(exc))
        raise TransportError(f"failed to reach {endpoint}: {exc}") from exc

    if response.status_code != 200:
        logger.warning("es_health_check_failed", url=url, status_code=response.status_code)
        raise BackendUnhealthyError(response.status_code)
    return True
