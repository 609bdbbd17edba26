"""Bucket catalog and profiles (which date parts a predictor pays attention to)."""

from .base import BucketState, Profile
from .catalog import DISTINCT_BUCKETS, INTERVAL_BUCKETS, PROFILES, BucketDefinition
from .registry import build_profile, coerce_profile
