"""
Control envelope — one tagged request out, one tagged reply in.

Requests and replies are separate types; a reply's ``type`` must echo the
request's ``type``.
"""

from enum import IntEnum
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from gtctl.models.path import U64_MAX, PathRecord, PathState, RateMode, check_interface_name


class ControlType(IntEnum):
    STATE = 1
    PATH_STATUS = 2


class PathConfigRequest(BaseModel):
    """Sparse patch for one path. ``None`` means "leave unchanged"."""

    model_config = {"frozen": True}

    interface_name: str = ""
    state: PathState = PathState.EMPTY
    rate_mode: Optional[RateMode] = None
    rate_tx: Optional[int] = Field(default=None, ge=0, le=U64_MAX)
    rate_rx: Optional[int] = Field(default=None, ge=0, le=U64_MAX)
    beat: Optional[int] = Field(default=None, ge=0, le=U64_MAX)  # usec
    preferred: Optional[bool] = None
    loss_limit: Optional[int] = Field(default=None, ge=0, le=255)
    rtt_limit: Optional[int] = Field(default=None, ge=0, le=U64_MAX)  # usec

    check_name = field_validator("interface_name")(check_interface_name)

    def changes(self) -> dict[str, object]:
        """Fields the caller explicitly set."""
        return self.model_dump(exclude={"interface_name"}, exclude_none=True, exclude_defaults=True)


class PathStatusQuery(BaseModel):
    model_config = {"frozen": True}

    interface_name: str = ""
    state: PathState = PathState.EMPTY

    check_name = field_validator("interface_name")(check_interface_name)


class ControlRequest(BaseModel):
    model_config = {"frozen": True}

    type: ControlType
    payload: Union[PathConfigRequest, PathStatusQuery]

    @model_validator(mode="after")
    def payload_matches_type(self) -> "ControlRequest":
        expected = PathConfigRequest if self.type == ControlType.STATE else PathStatusQuery
        if not isinstance(self.payload, expected):
            raise ValueError(f"{self.type.name} request needs a {expected.__name__} payload")
        return self

    @classmethod
    def state(cls, patch: PathConfigRequest) -> "ControlRequest":
        return cls(type=ControlType.STATE, payload=patch)

    @classmethod
    def path_status(cls, query: Optional[PathStatusQuery] = None) -> "ControlRequest":
        return cls(type=ControlType.PATH_STATUS, payload=query or PathStatusQuery())


class Continue(BaseModel):
    """One record enclosed, more follow."""
    kind: Literal["continue"] = "continue"
    record: PathRecord


class Done(BaseModel):
    kind: Literal["done"] = "done"


class Failed(BaseModel):
    kind: Literal["failed"] = "failed"
    code: int

    @field_validator("code")
    @classmethod
    def nonzero_code(cls, v: int) -> int:
        if v == 0:
            raise ValueError("a failed result needs a nonzero code")
        return v


ControlResult = Union[Continue, Done, Failed]


class ControlReply(BaseModel):
    type: ControlType
    result: ControlResult = Field(discriminator="kind")
