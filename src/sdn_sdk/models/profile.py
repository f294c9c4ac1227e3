from sdn_sdk.models.base import SDNModel


class DisplayNameResponse(SDNModel):
    displayname: str | None = None


class AvatarURLResponse(SDNModel):
    avatar_url: str | None = None
