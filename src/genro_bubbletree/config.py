# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""BubbleTree configuration loaded from environment variables."""

from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """BubbleTree settings.

    Attributes:
        separator: Path separator, also used as child-key prefix.
        debug: Enable debug-level logging in configure_logging().
        warn_missing_default_assembler: Warn when the assembler mapping has
            no default ('_') entry.
    """

    model_config = SettingsConfigDict(
        env_prefix="BUBBLETREE_",
        case_sensitive=False,
        extra="ignore",
    )

    separator: str = "/"
    debug: bool = False
    warn_missing_default_assembler: bool = True

    @field_validator("separator")
    @classmethod
    def _single_symbol(cls, value: str) -> str:
        if len(value) != 1 or value.isalnum() or value.isspace():
            raise ValueError("separator must be a single non-alphanumeric character")
        return value
