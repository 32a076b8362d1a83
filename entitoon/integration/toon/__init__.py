"""
TOON (Tag-Oriented Object Notation) Conversion Package

Flattens JSON-like records into one ``|``-delimited line per entity:

    #Entity[P-101]|Name:John Doe|VitalsTemperature:98.6|Medications:[Metformin,Aspirin]

PACKAGE STRUCTURE:
- values.py: tagged-union value model
- keys.py: composite key naming and camel-casing
- flattener.py: recursive flattening of nested mappings
- identity.py: entity id resolution with fallback tokens
- encoder.py: scalar rendering and line encoding
- converter.py: ToonConverter orchestration, validation and size statistics
- config.py: runtime configuration management
"""

from __future__ import annotations

import logging

from .values import Value, ValueKind, to_value
from .keys import capitalize, to_camel_case
from .flattener import flatten
from .identity import IdentityResolver, generate_fallback_id
from .encoder import render_scalar, encode_line, entity_tag
from .converter import (
    ToonConverter,
    ToonFormat,
    convert_to_toon,
    validate_records,
    estimate_savings,
    get_default_converter,
)
from .config import (
    ToonConverterConfig,
    ToonConfigManager,
    get_toon_config,
    load_toon_config,
    update_toon_config,
    reset_toon_config,
    save_toon_config,
    apply_environment_preset,
    ENVIRONMENT_PRESETS,
)

__version__ = "1.0.0"

__all__ = [
    # Value model
    "Value",
    "ValueKind",
    "to_value",
    # Core pipeline
    "capitalize",
    "to_camel_case",
    "flatten",
    "IdentityResolver",
    "generate_fallback_id",
    "render_scalar",
    "encode_line",
    "entity_tag",
    "ToonConverter",
    "ToonFormat",
    "convert_to_toon",
    "validate_records",
    "estimate_savings",
    "get_default_converter",
    # Config
    "ToonConverterConfig",
    "ToonConfigManager",
    "get_toon_config",
    "load_toon_config",
    "update_toon_config",
    "reset_toon_config",
    "save_toon_config",
    "apply_environment_preset",
    "ENVIRONMENT_PRESETS",
    "__version__",
]

logger = logging.getLogger(__name__)
logger.debug(f"TOON package initialized - {__version__}")
