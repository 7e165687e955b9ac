"""
Configuration module for the SMS finance engine.
"""

from .engine_config import (
    CATEGORY_NAMES,
    OTHER_CATEGORY_ID,
    PARSER_CONFIG,
    CATEGORIZATION_CONFIG,
    CONTEXT_INFERENCE_CONFIG,
    PATTERN_DETECTION_CONFIG,
    PREDICTION_CONFIG,
)
from .mapping_loader import (
    MappingFileError,
    load_merchant_mappings_csv,
    seed_mapping_store,
)

__all__ = [
    "CATEGORY_NAMES",
    "OTHER_CATEGORY_ID",
    "PARSER_CONFIG",
    "CATEGORIZATION_CONFIG",
    "CONTEXT_INFERENCE_CONFIG",
    "PATTERN_DETECTION_CONFIG",
    "PREDICTION_CONFIG",
    "MappingFileError",
    "load_merchant_mappings_csv",
    "seed_mapping_store",
]
