"""fxbarrier.gateway — raw trade ingestion and serialization."""

from fxbarrier.gateway.parser import (
    parse_fx_barrier_option as parse_fx_barrier_option,
)
from fxbarrier.gateway.parser import (
    trade_to_dict as trade_to_dict,
)
