# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Shared base model for API payloads.

The SchoolDesk backend speaks camelCase JSON. Every model here exposes
snake_case attributes and (de)serializes through camelCase aliases.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class APIModel(BaseModel):
    """Base model for records exchanged with the backend.

    Unknown keys sent by the API are ignored so that backend additions do
    not break the client.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_payload(self, **kwargs: Any) -> dict[str, Any]:
        """Serialize to a camelCase JSON-ready dict, dropping unset values.

        Args:
            **kwargs: Extra arguments forwarded to ``model_dump``.

        Returns:
            Request body dictionary.
        """
        return self.model_dump(by_alias=True, mode="json", exclude_none=True, **kwargs)
