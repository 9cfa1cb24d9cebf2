"""fxbarrier.core — public API for core types."""

from fxbarrier.core.errors import (
    BarrierEngineError as BarrierEngineError,
)
from fxbarrier.core.errors import (
    ConfigurationError as ConfigurationError,
)
from fxbarrier.core.errors import (
    FieldViolation as FieldViolation,
)
from fxbarrier.core.errors import (
    UnsupportedBarrierTypeError as UnsupportedBarrierTypeError,
)
from fxbarrier.core.errors import (
    ValidationError as ValidationError,
)
from fxbarrier.core.money import (
    DECIMAL_CONTEXT as DECIMAL_CONTEXT,
)
from fxbarrier.core.money import (
    CurrencyPair as CurrencyPair,
)
from fxbarrier.core.money import (
    Money as Money,
)
from fxbarrier.core.money import (
    NonEmptyStr as NonEmptyStr,
)
from fxbarrier.core.money import (
    NonNegativeDecimal as NonNegativeDecimal,
)
from fxbarrier.core.money import (
    PositiveDecimal as PositiveDecimal,
)
from fxbarrier.core.result import (
    Err as Err,
)
from fxbarrier.core.result import (
    Ok as Ok,
)
from fxbarrier.core.result import (
    Result as Result,
)
from fxbarrier.core.result import (
    sequence as sequence,
)
from fxbarrier.core.result import (
    unwrap as unwrap,
)
from fxbarrier.core.types import (
    FrozenMap as FrozenMap,
)
from fxbarrier.core.types import (
    UtcDatetime as UtcDatetime,
)
