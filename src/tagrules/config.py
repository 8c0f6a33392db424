# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Validator configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

__all__ = ("ValidatorConfig",)


class ValidatorConfig(BaseModel):
    """Settings for a Validator.

    Attributes:
        metadata_key: Key holding the rule in dataclass field metadata
            and pydantic json_schema_extra.
        recursive_token: Rule text that marks a record field for recursion.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    metadata_key: str = Field(default="validate", min_length=1)
    recursive_token: str = Field(default="inner", min_length=1)
