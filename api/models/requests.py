"""
MODULE_DESCRIPTION: Request Models - Pydantic Validation for Org Chart Payloads

===================================================================================
PURPOSE AND OVERVIEW
===================================================================================

Pydantic models for every request body the API accepts. They check shape
(types, lengths, image URL format) and normalize values; the org chart
rules that need the store (parent exists, single root) live in NodeService.

Field names follow the browser client's JSON: camelCase ``parentId`` and
``imageUrl``.

===================================================================================
MODELS
===================================================================================

NodeCreateRequest
    Member fields may arrive flat (``name``, ``bio``, ``role``, ``imageUrl``)
    or nested under ``memberDetails`` as the browser client sends them. Flat
    values win when both are given.

NodeUpdateRequest
    Only ``title`` or ``name``/``role``/``bio``. Extra keys are kept on the
    model and passed to NodeService, which rejects them as malformed input
    (400). ``type`` and ``parentId`` can never change after creation.

LoginRequest
    ``email`` and ``password``. Both are optional at this layer so a missing
    value fails like a wrong one (401 "Invalid credentials") instead of
    leaking which part was absent.

===================================================================================
IMAGE URLS
===================================================================================

``imageUrl`` accepts:
    - http:// or https:// URLs
    - data:image/<subtype>;base64,<payload> (the browser's FileReader output)
Empty strings become None. Length is capped by MAX_IMAGE_URL_LENGTH.
"""

import re
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from api.config.settings import MAX_IMAGE_URL_LENGTH, MAX_TEXT_FIELD_LENGTH

_DATA_URL_PATTERN = re.compile(r"^data:image/[A-Za-z0-9.+-]+;base64,[A-Za-z0-9+/=\s]+$")
_HTTP_URL_PATTERN = re.compile(r"^https?://\S+$")


def normalize_image_url(value: Optional[str]) -> Optional[str]:
    """Validate an image URL; blank values become None."""
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    if len(value) > MAX_IMAGE_URL_LENGTH:
        raise ValueError(
            f"imageUrl is too large ({len(value)} characters, max {MAX_IMAGE_URL_LENGTH})"
        )
    if not (_DATA_URL_PATTERN.match(value) or _HTTP_URL_PATTERN.match(value)):
        raise ValueError("imageUrl must be an http(s) URL or a base64 image data URL")
    return value


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class MemberDetails(BaseModel):
    """Nested member fields, as sent by the browser's "add member" dialog."""

    name: Optional[str] = Field(None, max_length=MAX_TEXT_FIELD_LENGTH)
    bio: Optional[str] = Field(None, max_length=MAX_TEXT_FIELD_LENGTH)
    role: Optional[str] = Field(None, max_length=MAX_TEXT_FIELD_LENGTH)
    imageUrl: Optional[str] = None

    @field_validator("bio", "role")
    @classmethod
    def validate_optional_text(cls, v):
        return _blank_to_none(v)

    @field_validator("imageUrl")
    @classmethod
    def validate_image_url(cls, v):
        return normalize_image_url(v)


class NodeCreateRequest(BaseModel):
    """Request model for creating a branch or member node."""

    type: Literal["branch", "member"] = Field(
        ..., description="Node variant", examples=["branch"]
    )
    parentId: Optional[str] = Field(
        None,
        max_length=64,
        description="Id of the parent node. Omit only when creating the root.",
        examples=["3f1c2d9e-6a4b-4c1e-9f0a-2b7d5e8c1a23"],
    )
    title: Optional[str] = Field(
        None,
        max_length=MAX_TEXT_FIELD_LENGTH,
        description="Branch label (branches only)",
        examples=["Engineering"],
    )
    name: Optional[str] = Field(None, max_length=MAX_TEXT_FIELD_LENGTH)
    bio: Optional[str] = Field(None, max_length=MAX_TEXT_FIELD_LENGTH)
    role: Optional[str] = Field(None, max_length=MAX_TEXT_FIELD_LENGTH)
    imageUrl: Optional[str] = None
    memberDetails: Optional[MemberDetails] = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"type": "branch", "title": "Engineering", "parentId": "<root id>"},
                {
                    "type": "member",
                    "parentId": "<branch id>",
                    "memberDetails": {
                        "name": "Ann",
                        "role": "Lead",
                        "bio": "Builds things.",
                        "imageUrl": "data:image/png;base64,iVBORw0KGgo=",
                    },
                },
            ]
        }
    }

    @field_validator("parentId")
    @classmethod
    def validate_parent_id(cls, v):
        return _blank_to_none(v)

    @field_validator("bio", "role")
    @classmethod
    def validate_optional_text(cls, v):
        return _blank_to_none(v)

    @field_validator("imageUrl")
    @classmethod
    def validate_image_url(cls, v):
        return normalize_image_url(v)

    @model_validator(mode="after")
    def merge_member_details(self):
        """Fold ``memberDetails`` into the flat member fields."""
        details = self.memberDetails
        if details is not None:
            for field_name in ("name", "bio", "role", "imageUrl"):
                if getattr(self, field_name) is None:
                    setattr(self, field_name, getattr(details, field_name))
        return self


class NodeUpdateRequest(BaseModel):
    """Request model for editing a node.

    Branches accept ``title``; members accept ``name``, ``role`` and ``bio``.
    Which fields apply is decided against the stored node type.
    """

    model_config = ConfigDict(extra="allow")

    title: Optional[str] = Field(None, max_length=MAX_TEXT_FIELD_LENGTH)
    name: Optional[str] = Field(None, max_length=MAX_TEXT_FIELD_LENGTH)
    role: Optional[str] = Field(None, max_length=MAX_TEXT_FIELD_LENGTH)
    bio: Optional[str] = Field(None, max_length=MAX_TEXT_FIELD_LENGTH)


class LoginRequest(BaseModel):
    """Admin login form."""

    email: Optional[str] = Field(None, max_length=320, examples=["admin@example.com"])
    password: Optional[str] = Field(None, max_length=1024)
