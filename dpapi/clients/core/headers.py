"""Header name constants and get/set helpers for the common request headers.

Headers are handled as plain ``dict[str, str]`` so the same helpers work for
the outgoing request headers passed to aiohttp and for response headers
(``CIMultiDictProxy`` behaves like a mapping for lookups).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from .exceptions import HeaderNotFoundError, HeaderValueEmptyError

COLLECTION_ID_HEADER = "Collection-Id"
USER_AUTH_TOKEN_HEADER = "X-Florence-Token"
SERVICE_AUTH_TOKEN_HEADER = "Authorization"
DOWNLOAD_SERVICE_TOKEN_HEADER = "X-Download-Service-Token"
IF_MATCH_HEADER = "If-Match"
ETAG_HEADER = "ETag"

BEARER_PREFIX = "Bearer "

# Wildcard If-Match value asking the API to skip the ETag check
IF_MATCH_ANY = "*"


def _set(headers: dict[str, str], name: str, value: str) -> None:
    if not value:
        raise HeaderValueEmptyError(name)
    headers[name] = value


def set_collection_id(headers: dict[str, str], value: str) -> None:
    _set(headers, COLLECTION_ID_HEADER, value)


def set_user_auth_token(headers: dict[str, str], value: str) -> None:
    _set(headers, USER_AUTH_TOKEN_HEADER, value)


def set_service_auth_token(headers: dict[str, str], value: str) -> None:
    """Set the service Authorization header, adding the bearer prefix if missing."""
    if value and not value.startswith(BEARER_PREFIX):
        value = BEARER_PREFIX + value
    _set(headers, SERVICE_AUTH_TOKEN_HEADER, value)


def set_download_service_token(headers: dict[str, str], value: str) -> None:
    _set(headers, DOWNLOAD_SERVICE_TOKEN_HEADER, value)


def set_if_match(headers: dict[str, str], value: str) -> None:
    _set(headers, IF_MATCH_HEADER, value)


def get_response_etag(headers: Mapping[str, str]) -> str:
    """Return the ETag response header.

    Raises:
        HeaderNotFoundError: If the response carries no ETag
    """
    value = headers.get(ETAG_HEADER)
    if value is None:
        raise HeaderNotFoundError(ETAG_HEADER)
    return value


def build_auth_headers(
    *,
    user_auth_token: str = "",
    service_auth_token: str = "",
    collection_id: str = "",
    download_service_token: str = "",
    if_match: str = "",
) -> dict[str, str]:
    """Build the standard request headers, skipping any empty value."""
    headers: dict[str, str] = {}
    if user_auth_token:
        set_user_auth_token(headers, user_auth_token)
    if service_auth_token:
        set_service_auth_token(headers, service_auth_token)
    if collection_id:
        set_collection_id(headers, collection_id)
    if download_service_token:
        set_download_service_token(headers, download_service_token)
    if if_match:
        set_if_match(headers, if_match)
    return headers


@dataclass(frozen=True)
class RequestAuth:
    """Caller identity forwarded on every request.

    Attributes:
        user_auth_token: Florence user token
        service_auth_token: Service token, sent as a bearer Authorization header
        collection_id: Collection the request is scoped to
        download_service_token: Token for the download service
    """

    user_auth_token: str = ""
    service_auth_token: str = ""
    collection_id: str = ""
    download_service_token: str = ""

    def headers(self, *, if_match: str = "") -> dict[str, str]:
        return build_auth_headers(
            user_auth_token=self.user_auth_token,
            service_auth_token=self.service_auth_token,
            collection_id=self.collection_id,
            download_service_token=self.download_service_token,
            if_match=if_match,
        )
