"""Calendar arithmetic used by the predictor.

Plain ``datetime`` values are the samples; components are read through static
accessor tables and arithmetic goes through ``dateutil.relativedelta`` so month
and year steps stay calendar correct.
"""

from .parts import (
    DATE_ACCESSORS,
    DURATION_ACCESSORS,
    STEP_SCALE,
    Duration,
    add_seconds,
    between,
    epoch_seconds,
    read_date_part,
    read_duration_part,
    shift,
    truncate,
)
