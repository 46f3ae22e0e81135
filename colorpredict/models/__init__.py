"""Records and the pattern predictor."""

from colorpredict.models.records import Outcome, Prediction
from colorpredict.models.predictor import PatternPredictor, predict_next

__all__ = ["Outcome", "Prediction", "PatternPredictor", "predict_next"]
