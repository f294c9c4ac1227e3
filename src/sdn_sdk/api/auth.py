"""Wallet/DID login API methods."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from sdn_sdk.models.auth import (
    CreateDIDResponse,
    DIDListResponse,
    LoginResponse,
    PreLoginResponse,
)

if TYPE_CHECKING:
    from sdn_sdk.http import HTTPClient

DID_API_PREFIX = "/_api/client/v3"
DID_LOGIN_TYPE = "m.login.did.identity"

# Signs the pre-login message with the wallet key and returns a 0x-prefixed hex signature
Signer = Callable[[str], "str | Awaitable[str]"]


class AuthAPI:
    """Methods for the DID endpoints under ``/_api/client/v3``.

    The login handshake is:

    1. :meth:`get_did_list` for the wallet address (may be empty),
    2. :meth:`pre_login` with the first DID or the bare address,
    3. sign the returned ``message`` with the wallet key,
    4. :meth:`did_login` with the signature, yielding an access token.

    :meth:`sdn_sdk.client.Client.login` runs all four steps.
    """

    def __init__(self, http: HTTPClient) -> None:
        self._http = http

    async def get_did_list(self, address: str) -> list[str]:
        r = await self._http.get(f"{DID_API_PREFIX}/address/{address}")
        return DIDListResponse.model_validate(r.json()).data

    async def create_did(self, address: str) -> CreateDIDResponse:
        r = await self._http.post(f"{DID_API_PREFIX}/did/create", json={"address": address})
        return CreateDIDResponse.model_validate(r.json())

    async def save_did(
        self, did: str, signature: str, operation: str, address: str, updated: str
    ) -> None:
        await self._http.post(
            f"{DID_API_PREFIX}/did/{did}",
            json={
                "signature": signature,
                "operation": operation,
                "address": address,
                "updated": updated,
            },
        )

    async def pre_login(self, address: str, did: str | None = None) -> PreLoginResponse:
        payload: dict[str, Any] = {"did": did} if did else {"address": address}
        r = await self._http.post(f"{DID_API_PREFIX}/did/pre_login1", json=payload)
        return PreLoginResponse.model_validate(r.json())

    async def did_login(
        self,
        address: str,
        pre_login: PreLoginResponse,
        token: str,
        device_id: str = "",
    ) -> LoginResponse:
        payload = {
            "type": DID_LOGIN_TYPE,
            "random_server": pre_login.random_server,
            "updated": pre_login.updated,
            "identifier": {
                "did": pre_login.did,
                "address": address,
                "message": pre_login.message,
                "token": token,
            },
            "device_id": device_id,
        }
        r = await self._http.post(f"{DID_API_PREFIX}/did/login", json=payload)
        return LoginResponse.model_validate(r.json())

    async def logout(self) -> None:
        await self._http.post(self._http.build_path("logout"))
