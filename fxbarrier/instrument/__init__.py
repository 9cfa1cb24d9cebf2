"""fxbarrier.instrument — payoff primitives and the barrier option trade."""

from fxbarrier.instrument.barrier import BarrierSpec as BarrierSpec
from fxbarrier.instrument.barrier import BarrierType as BarrierType
from fxbarrier.instrument.barrier import FxEuropeanBarrierOption as FxEuropeanBarrierOption
from fxbarrier.instrument.barrier import FxLegAmounts as FxLegAmounts
from fxbarrier.instrument.barrier import LongShort as LongShort
from fxbarrier.instrument.barrier import OptionSpec as OptionSpec
from fxbarrier.instrument.barrier import PremiumPayment as PremiumPayment
from fxbarrier.instrument.barrier import barrier_payoff as barrier_payoff
from fxbarrier.instrument.barrier import validate_trade as validate_trade
from fxbarrier.instrument.payoffs import CashOrNothingPayoff as CashOrNothingPayoff
from fxbarrier.instrument.payoffs import OptionType as OptionType
from fxbarrier.instrument.payoffs import VanillaPayoff as VanillaPayoff
