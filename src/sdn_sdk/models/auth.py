from sdn_sdk.models.base import SDNModel


class DIDListResponse(SDNModel):
    data: list[str] = []


class CreateDIDResponse(SDNModel):
    did: str
    message: str
    updated: str = ""


class PreLoginResponse(SDNModel):
    did: str = ""
    message: str
    random_server: str = ""
    updated: str = ""


class LoginResponse(SDNModel):
    access_token: str
    user_id: str
    device_id: str = ""
