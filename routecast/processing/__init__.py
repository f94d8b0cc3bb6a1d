"""Route annotation pipeline stages."""

from .pipeline import RoutePipeline
from .simplify import simplify_geometry
from .legs import normalize_duration, normalize_legs
from .weather import WeatherAnnotator, aggregate_intervals
from .risk import classify_risk, risk_legend
from .features import assemble_features
from .editor import RouteEditor, EditorState

__all__ = [
    "RoutePipeline",
    "simplify_geometry",
    "normalize_duration",
    "normalize_legs",
    "WeatherAnnotator",
    "aggregate_intervals",
    "classify_risk",
    "risk_legend",
    "assemble_features",
    "RouteEditor",
    "EditorState",
]
