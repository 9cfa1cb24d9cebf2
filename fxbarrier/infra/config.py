"""Engine configuration.

Pure configuration data, built once at the composition root and passed to
build_trade / price_trade. The engine never reads process-wide state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import final

DEFAULT_MARKET_CONFIGURATION: str = "default"


@final
@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Configuration for building and pricing barrier option trades."""

    # market configuration name handed to the payment pricer for premiums
    market_configuration: str = DEFAULT_MARKET_CONFIGURATION
    # quantize the reported NPV to the ISO 4217 minor unit of the NPV currency
    round_npv_to_minor_unit: bool = False
    # include per-leg values in ValuationResult.components
    report_components: bool = True

    def __post_init__(self) -> None:
        if not self.market_configuration:
            raise TypeError("EngineConfig.market_configuration must be non-empty")
