"""Training and prediction.

Core flow: train bucket counts -> per-bucket statistics -> depth-first search
around (most recent date + mean interval) -> statistical gate + callbacks ->
rank by total deviation.
"""

from .accept import accept_distinct, accept_interval
from .predictor import Predictor
from .rank import best, rank
from .search import SearchContext, search_distinct, search_interval
from .train import bucket_statistics, train
from .trim import trim
from .types import PredictionCandidate, PredictOptions, TrainedModel
