from enum import Enum

from sdn_sdk.models.base import SDNModel


class ErrorCode(str, Enum):
    M_UNKNOWN = "M_UNKNOWN"
    M_FORBIDDEN = "M_FORBIDDEN"
    M_UNKNOWN_TOKEN = "M_UNKNOWN_TOKEN"
    M_MISSING_TOKEN = "M_MISSING_TOKEN"
    M_BAD_JSON = "M_BAD_JSON"
    M_NOT_JSON = "M_NOT_JSON"
    M_NOT_FOUND = "M_NOT_FOUND"
    M_LIMIT_EXCEEDED = "M_LIMIT_EXCEEDED"
    M_UNRECOGNIZED = "M_UNRECOGNIZED"
    M_USER_IN_USE = "M_USER_IN_USE"
    M_ROOM_IN_USE = "M_ROOM_IN_USE"
    M_INVALID_PARAM = "M_INVALID_PARAM"


class ErrorResponse(SDNModel):
    # Kept as a plain string: servers may send codes this SDK does not know.
    errcode: str
    error: str = ""
    retry_after_ms: int | None = None
