"""
Module: loader.config

Purpose:
    Configuration dataclass for the exam loading pipeline. Immutable
    configuration with validation on construction, optionally overridden
    from environment variables.

Key Classes:
    - LoaderConfig: Content store location, batch shape and gating policy

Dependencies:
    - dataclasses (std)
    - os (std): Environment overrides

Used By:
    - loader.scheduler: Batch size and slot count
    - loader.fetcher: Base URL and timeout
    - controller: Selection gating
    - cli: Command-line overrides
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from enem_toolkit.common.exams import LANGUAGE_REQUIRED_THROUGH
from enem_toolkit.core.models.questions import MAX_SLOTS


DEFAULT_BASE_URL = "https://titenq-enem.vercel.app/exams"

ENV_BASE_URL = "ENEM_BASE_URL"
ENV_BATCH_SIZE = "ENEM_BATCH_SIZE"
ENV_REQUEST_TIMEOUT = "ENEM_REQUEST_TIMEOUT"
ENV_LANGUAGE_REQUIRED_THROUGH = "ENEM_LANGUAGE_REQUIRED_THROUGH"


@dataclass(frozen=True)
class LoaderConfig:
    """
    Configuration for loading an exam (immutable).

    Attributes:
        base_url: Root of the content store
        total_slots: Number of slots to load (1..180)
        batch_size: Slots fetched concurrently per batch
        request_timeout: Per-request transport timeout in seconds
        language_required_through: Last year that must wait for a language

    Example:
        >>> config = LoaderConfig(batch_size=20)
        >>> config.batch_count
        9
    """

    base_url: str = DEFAULT_BASE_URL
    total_slots: int = MAX_SLOTS
    batch_size: int = 10
    request_timeout: float = 15.0
    language_required_through: int = LANGUAGE_REQUIRED_THROUGH

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not self.base_url:
            raise ValueError("base_url must not be empty")
        if not (1 <= self.total_slots <= MAX_SLOTS):
            raise ValueError(f"total_slots must be 1-{MAX_SLOTS}: {self.total_slots}")
        if self.batch_size <= 0:
            raise ValueError(f"batch_size must be positive: {self.batch_size}")
        if self.request_timeout <= 0:
            raise ValueError(f"request_timeout must be positive: {self.request_timeout}")
        # Normalise so URL joining never doubles the slash
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @property
    def batch_count(self) -> int:
        return -(-self.total_slots // self.batch_size)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> LoaderConfig:
        """
        Build a config from environment variables over the defaults.

        Explicit keyword overrides win over the environment.

        Args:
            environ: Mapping to read instead of os.environ
            **overrides: Field values to apply last

        Raises:
            ValueError: If a variable holds an invalid value
        """
        env = os.environ if environ is None else environ
        values: dict = {}
        if env.get(ENV_BASE_URL):
            values["base_url"] = env[ENV_BASE_URL]
        if env.get(ENV_BATCH_SIZE):
            values["batch_size"] = _parse_env(env, ENV_BATCH_SIZE, int)
        if env.get(ENV_REQUEST_TIMEOUT):
            values["request_timeout"] = _parse_env(env, ENV_REQUEST_TIMEOUT, float)
        if env.get(ENV_LANGUAGE_REQUIRED_THROUGH):
            values["language_required_through"] = _parse_env(env, ENV_LANGUAGE_REQUIRED_THROUGH, int)
        config = cls(**values)
        overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(config, **overrides) if overrides else config


def _parse_env(env: Mapping[str, str], name: str, convert):
    try:
        return convert(env[name])
    except ValueError:
        raise ValueError(f"{name} has an invalid value: {env[name]!r}")
