"""Sampling parameters for choosing the next token."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class TopKParams:
    k: int = 40
    min_keep: int = 1


@dataclass(frozen=True)
class LocallyTypicalParams:
    p: float = 1.0
    min_keep: int = 1


@dataclass(frozen=True)
class TopPParams:
    p: float = 0.95
    min_keep: int = 1


@dataclass(frozen=True)
class TemperatureParams:
    temperature: float = 0.7


@dataclass(frozen=True)
class SamplerParams:
    """Which sampling stages run, and with what parameters."""

    top_k: TopKParams = field(default_factory=TopKParams)
    top_k_enabled: bool = True
    typical: LocallyTypicalParams = field(default_factory=LocallyTypicalParams)
    typical_enabled: bool = True
    top_p: TopPParams = field(default_factory=TopPParams)
    top_p_enabled: bool = True
    temperature: TemperatureParams = field(default_factory=TemperatureParams)
    temperature_enabled: bool = True

    def stages(self) -> list[tuple[str, Any]]:
        """The enabled stages in order, always ending with the random draw."""
        candidates = [
            ("top_k", self.top_k_enabled, self.top_k),
            ("locally_typical", self.typical_enabled, self.typical),
            ("top_p", self.top_p_enabled, self.top_p),
            ("temperature", self.temperature_enabled, self.temperature),
        ]
        chain = [(name, params) for name, enabled, params in candidates if enabled]
        chain.append(("rand_distrib", None))
        return chain