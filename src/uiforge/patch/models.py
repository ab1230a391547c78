"""Patch operation schema."""

import re
from typing import Annotated, Literal, Union

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from ..core.validate import JSX_ATTRIBUTE_PATTERN, MAX_PATCH_OPS

_TOKEN_FORBIDDEN = re.compile(r"[\s\"'`{}<>]")
_ATTRIBUTE_RE = re.compile(JSX_ATTRIBUTE_PATTERN)


def _check_token(value: str) -> str:
    if not value:
        raise ValueError("class token cannot be empty")
    if _TOKEN_FORBIDDEN.search(value):
        raise ValueError(f"invalid class token: {value!r}")
    return value


ClassToken = Annotated[str, AfterValidator(_check_token)]


class _Op(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    file: str = Field(min_length=1)


class AddClassOp(_Op):
    op: Literal["addClass"]
    jsx: str = Field(min_length=1)
    class_name: ClassToken = Field(alias="className")

    @property
    def locator(self) -> str:
        return self.jsx


class RemoveClassOp(_Op):
    op: Literal["removeClass"]
    jsx: str = Field(min_length=1)
    class_name: ClassToken = Field(alias="className")

    @property
    def locator(self) -> str:
        return self.jsx


class ReplaceClassOp(_Op):
    op: Literal["replaceClass"]
    jsx: str = Field(min_length=1)
    from_: ClassToken = Field(alias="from")
    to: ClassToken

    @property
    def locator(self) -> str:
        return self.jsx


class SetAttributeOp(_Op):
    op: Literal["setAttribute"]
    jsx: str = Field(min_length=1)
    name: str
    value: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not _ATTRIBUTE_RE.fullmatch(v):
            raise ValueError(f"invalid JSX attribute name: {v!r}")
        return v

    @property
    def locator(self) -> str:
        return self.jsx


class InsertAfterOp(_Op):
    op: Literal["insertAfter"]
    target_jsx: str = Field(alias="targetJsx", min_length=1)
    code: str = Field(min_length=1)

    @property
    def locator(self) -> str:
        return self.target_jsx


class TextEditOp(_Op):
    op: Literal["textEdit"]
    find: str = Field(min_length=1)
    replace: str

    @property
    def locator(self) -> str:
        return self.find


PatchOp = Annotated[
    Union[AddClassOp, RemoveClassOp, ReplaceClassOp, SetAttributeOp, InsertAfterOp, TextEditOp],
    Field(discriminator="op"),
]


class PatchRequest(BaseModel):
    """
    Ordered list of patch operations.

    The op limit defaults to MAX_PATCH_OPS and can be overridden with
    validation context: PatchRequest.model_validate(data, context={"max_ops": n}).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    ops: list[PatchOp] = Field(min_length=1)

    @field_validator("ops")
    @classmethod
    def validate_op_count(cls, v: list, info: ValidationInfo) -> list:
        max_ops = (info.context or {}).get("max_ops", MAX_PATCH_OPS)
        if len(v) > max_ops:
            raise ValueError(f"too many ops: {len(v)} (maximum {max_ops})")
        return v


class PatchResult(BaseModel):
    """Outcome of a patch request; diffs survive partial failure."""

    success: bool
    diffs: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    source: str = ""
