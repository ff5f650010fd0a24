"""Decision package: utility scoring and direction selection."""

from huntsim.decision.selector import DirectionSelector
from huntsim.decision.utility import ScoredDirection, UtilityEvaluator, distance_index

__all__ = ["DirectionSelector", "ScoredDirection", "UtilityEvaluator", "distance_index"]
