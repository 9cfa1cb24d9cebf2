"""fxbarrier.pricing — static replication, leg pricers and the trade engine."""

from fxbarrier.pricing.composite import BarrierOptionInstrument as BarrierOptionInstrument
from fxbarrier.pricing.composite import CompositeInstrument as CompositeInstrument
from fxbarrier.pricing.composite import assemble_composite as assemble_composite
from fxbarrier.pricing.engine import BuiltTrade as BuiltTrade
from fxbarrier.pricing.engine import build_trade as build_trade
from fxbarrier.pricing.engine import price_trade as price_trade
from fxbarrier.pricing.engine import project_outputs as project_outputs
from fxbarrier.pricing.garman_kohlhagen import GarmanKohlhagenLegPricer as GarmanKohlhagenLegPricer
from fxbarrier.pricing.legs import PremiumLeg as PremiumLeg
from fxbarrier.pricing.legs import PriceableLeg as PriceableLeg
from fxbarrier.pricing.premiums import attach_premiums as attach_premiums
from fxbarrier.pricing.protocols import InstrumentKind as InstrumentKind
from fxbarrier.pricing.protocols import LegPricer as LegPricer
from fxbarrier.pricing.protocols import StubLegPricer as StubLegPricer
from fxbarrier.pricing.registry import LegPricerRegistry as LegPricerRegistry
from fxbarrier.pricing.replication import LegKind as LegKind
from fxbarrier.pricing.replication import Replication as Replication
from fxbarrier.pricing.replication import ReplicationLeg as ReplicationLeg
from fxbarrier.pricing.replication import select_replication as select_replication
from fxbarrier.pricing.types import TradeOutputs as TradeOutputs
from fxbarrier.pricing.types import ValuationResult as ValuationResult
