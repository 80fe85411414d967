"""Logger settings loaded from environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, Field, field_validator

from greenlog.models import Behavior

_TRUTHY = {"1", "true", "yes", "on"}


class LoggerSettings(BaseModel):
    """Constructor options for :class:`greenlog.logger.Logger`."""

    sink_path: str | None = None
    write_frequency: int = Field(default=0, ge=0)
    flags: set[str] = Field(default_factory=set)
    skip_failed_writes: bool = False

    @field_validator("flags", mode="before")
    @classmethod
    def _split_flags(cls, value: object) -> object:
        if isinstance(value, str):
            return {part.strip() for part in value.split(",") if part.strip()}
        return value

    @field_validator("flags")
    @classmethod
    def _known_flags(cls, value: set[str]) -> set[str]:
        normalized = {name.upper() for name in value}
        unknown = sorted(n for n in normalized if n not in Behavior.__members__)
        if unknown:
            raise ValueError(f"unknown behavior flags: {', '.join(unknown)}")
        return normalized

    def behavior_flags(self) -> Behavior:
        result = Behavior(0)
        for name in self.flags:
            result |= Behavior[name]
        return result

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> LoggerSettings:
        """Build settings from ``GREENLOG_*`` environment variables.

        Raises:
            pydantic.ValidationError: on malformed values.
        """
        env = os.environ if environ is None else environ
        data: dict[str, object] = {}
        if env.get("GREENLOG_SINK_PATH"):
            data["sink_path"] = env["GREENLOG_SINK_PATH"]
        if env.get("GREENLOG_WRITE_FREQUENCY"):
            data["write_frequency"] = env["GREENLOG_WRITE_FREQUENCY"]
        if env.get("GREENLOG_FLAGS"):
            data["flags"] = env["GREENLOG_FLAGS"]
        if env.get("GREENLOG_SKIP_FAILED_WRITES"):
            data["skip_failed_writes"] = (
                env["GREENLOG_SKIP_FAILED_WRITES"].strip().lower() in _TRUTHY
            )
        return cls.model_validate(data)
