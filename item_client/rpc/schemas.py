"""
Item Service Schemas.

Request and response models for every remote operation. Every response
field has a zero default so that ``Model()`` is a valid "empty" response.
"""

from pydantic import BaseModel, ConfigDict, Field


class _Message(BaseModel):
    """Base for wire models. Unknown fields from newer servers are ignored."""

    model_config = ConfigDict(extra="ignore", frozen=True)


class Kv(_Message):
    key: str = ""
    value: str = ""


class Item(_Message):
    id: int = 0
    name: str = ""


# =============================================================================
# Requests
# =============================================================================


class GetItemRequest(_Message):
    key: str


class SetItemRequest(_Message):
    kv: Kv


class DeleteItemRequest(_Message):
    keys: list[str] = Field(default_factory=list)


class PingRequest(_Message):
    # None means "no message", which is not the same as an empty string.
    message: str | None = None


class PostItemRequest(_Message):
    name: str


# =============================================================================
# Responses
# =============================================================================


class GetItemResponse(_Message):
    value: str = ""


class SetItemResponse(_Message):
    message: str = ""


class DeleteItemResponse(_Message):
    count: int = 0


class PingResponse(_Message):
    message: str = ""


class PostItemResponse(_Message):
    item: Item = Field(default_factory=Item)


class ErrorDetail(BaseModel):
    """Error detail carried in a non-2xx reply."""

    code: str
    message: str


class ErrorEnvelope(BaseModel):
    """Body of a failed call."""

    success: bool = False
    error: ErrorDetail
