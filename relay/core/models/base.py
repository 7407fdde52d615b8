"""
Base Pydantic models for relay.

Provides common configuration and base classes for all relay models.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class RelayBaseModel(BaseModel):
    """Base model for all relay Pydantic models.

    Configuration:
        - strict: Strict type coercion (no implicit conversions)
        - validate_assignment: Validate on attribute assignment
        - extra: Reject unknown fields
        - populate_by_name: Allow field aliases
        - use_enum_values: Serialize enums as values
    """

    model_config = ConfigDict(
        strict=True,
        validate_assignment=True,
        extra="forbid",
        populate_by_name=True,
        use_enum_values=True,
        revalidate_instances="never",
    )


class ImmutableModel(RelayBaseModel):
    """Immutable base model for options that must not change after creation."""

    model_config = ConfigDict(
        frozen=True,
        strict=True,
        extra="forbid",
        populate_by_name=True,
        use_enum_values=True,
        revalidate_instances="never",
    )


class OptionsModel(ImmutableModel):
    """Base model for builder options read from workspace TOML or CLI flags.

    Coercion is allowed because TOML and click hand over loosely typed values.
    """

    model_config = ConfigDict(
        frozen=True,
        strict=False,
        extra="forbid",
        populate_by_name=True,
        use_enum_values=True,
        revalidate_instances="never",
    )
