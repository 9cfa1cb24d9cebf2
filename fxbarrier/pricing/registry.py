"""Leg pricer registry, keyed by (instrument kind, currency pair).

Built at the composition root and passed explicitly to the engine::

    registry = LegPricerRegistry()
    pair = unwrap(CurrencyPair.parse("EUR/USD"))
    registry.register_all(currency_pair=pair, pricer=GarmanKohlhagenLegPricer(...))
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import final

from fxbarrier.core.errors import ConfigurationError
from fxbarrier.core.money import CurrencyPair
from fxbarrier.core.result import Err, Ok
from fxbarrier.core.types import UtcDatetime
from fxbarrier.pricing.protocols import InstrumentKind, LegPricer


@final
@dataclass
class LegPricerRegistry:
    """Mapping (InstrumentKind, currency pair) -> LegPricer. Last registration wins."""

    _entries: dict[tuple[InstrumentKind, str], LegPricer] = field(default_factory=dict)

    def register(
        self, *, kind: InstrumentKind, currency_pair: CurrencyPair, pricer: LegPricer,
    ) -> None:
        self._entries[(kind, currency_pair.value)] = pricer

    def register_all(self, *, currency_pair: CurrencyPair, pricer: LegPricer) -> None:
        """Register one pricer for every instrument kind of the pair."""
        for kind in InstrumentKind:
            self.register(kind=kind, currency_pair=currency_pair, pricer=pricer)

    def resolve(
        self, kind: InstrumentKind, currency_pair: CurrencyPair,
    ) -> Ok[LegPricer] | Err[ConfigurationError]:
        pricer = self._entries.get((kind, currency_pair.value))
        if pricer is None:
            return Err(ConfigurationError(
                message=f"No leg pricer registered for {kind.value} {currency_pair.value}",
                code="MISSING_LEG_PRICER",
                timestamp=UtcDatetime.now(),
                source="pricing.registry.resolve",
                instrument_kind=kind.value,
                currency_pair=currency_pair.value,
            ))
        return Ok(pricer)

    def __len__(self) -> int:
        return len(self._entries)
