"""
Model bases shared by the jshellw value types.

Run records (layout, classpath, session result) and the platform snapshot
are frozen once built; config sections derive from the mutable base and
relax strictness so TOML and environment strings can be coerced.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class JShellwBaseModel(BaseModel):
    """Strict model that refuses unknown fields and revalidates on assignment."""

    model_config = ConfigDict(
        strict=True,
        validate_assignment=True,
        extra="forbid",
        populate_by_name=True,
        use_enum_values=True,
        revalidate_instances="never",
    )


class ImmutableModel(JShellwBaseModel):
    """Frozen variant for values produced by one pipeline stage and read by the next."""

    model_config = ConfigDict(frozen=True, validate_assignment=False)
