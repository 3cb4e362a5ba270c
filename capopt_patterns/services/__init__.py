"""
Core service modules for the CapOpt pattern service
"""
from .association_resolver import AssociationResolver, Resolution, resolve_dimensions
from .location_rules import extract_state, filter_by_state
from .pattern_analysis import PatternAnalysisService, normalize_code
from .pattern_engine import PatternEngine, calculate_confidence

__all__ = [
    "AssociationResolver",
    "Resolution",
    "resolve_dimensions",
    "extract_state",
    "filter_by_state",
    "PatternAnalysisService",
    "normalize_code",
    "PatternEngine",
    "calculate_confidence",
]
