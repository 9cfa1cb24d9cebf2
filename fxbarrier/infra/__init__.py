"""fxbarrier.infra — engine configuration."""

from fxbarrier.infra.config import DEFAULT_MARKET_CONFIGURATION as DEFAULT_MARKET_CONFIGURATION
from fxbarrier.infra.config import EngineConfig as EngineConfig
