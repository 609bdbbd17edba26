from __future__ import annotations


class PredictError(Exception):
    """Base class for everything the predictor raises on purpose."""


class InvalidConfiguration(PredictError, ValueError):
    """Unknown preset/bucket, no buckets requested, or malformed options."""


class InvalidInput(PredictError, ValueError):
    """The sample list cannot be trained on."""


class MissingCapability(PredictError, TypeError):
    """A date-like or duration-like value lacks an accessor a bucket needs."""


class DivideByZero(PredictError, ZeroDivisionError):
    """A statistic was requested over zero occurrences."""


class InsufficientSamples(InvalidInput, DivideByZero):
    """Interval buckets need at least two samples."""


class NoBucketsConfigured(PredictError, RuntimeError):
    """Prediction requested with neither distinct nor interval buckets on."""
