"""
config_schema.py - Self-Validating Engine Configuration Loader

Builds the frozen diamond.EngineConfig from JSON/YAML files or dicts.

Design Principles:
- Self-validating: Can't create invalid config
- Self-healing: Invalid input -> safe defaults + warnings (non-strict mode)
- Self-describing: Exports its JSON Schema
- Immutable: Frozen after load, no runtime mutation
"""

from __future__ import annotations

import json
import warnings
from dataclasses import asdict, fields
from pathlib import Path
from typing import Any, Dict, List, Tuple

import yaml
from jsonschema import Draft202012Validator

from diamond.types_config import EngineConfig, PRESETS


__all__ = [
    'load',
    'from_dict',
    'default',
    'to_dict',
    'save',
    'schema',
]


# =============================================================================
# JSON Schema Definition (Draft 2020-12)
# =============================================================================

def _unit(description: str, exclusive_min: bool = False) -> Dict[str, Any]:
    prop: Dict[str, Any] = {"type": "number", "description": description, "maximum": 1.0}
    if exclusive_min:
        prop["exclusiveMinimum"] = 0.0
    else:
        prop["minimum"] = 0.0
    return prop


_JSON_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "EngineConfig",
    "description": "Spacetime diamond engine configuration",
    "type": "object",
    "properties": {
        "max_diamonds": {
            "type": "integer",
            "description": "Repository capacity",
            "minimum": 1,
        },
        "receipt_ledger_max": {
            "type": "integer",
            "description": "Receipts kept on the ledger before the oldest are dropped",
            "minimum": 1,
        },
        "cosmological_constant": {
            "type": "number",
            "description": "Background dark-energy term (m^-2)",
            "minimum": 0.0,
        },
        "coherence_baseline": _unit("Initial coherence in flat spacetime"),
        "causality_baseline": _unit("Initial causality of every diamond"),
        "curvature_scale": {
            "type": "number",
            "description": "Curvature -> decoherence loss factor",
            "minimum": 0.0,
        },
        "latency_scale": {
            "type": "number",
            "description": "Latency at which channel fidelity drops by 1/e",
            "exclusiveMinimum": 0.0,
        },
        "decoherence_rate": {
            "type": "number",
            "description": "Baseline decoherence per unit proper time",
            "minimum": 0.0,
        },
        "xi_floor": {
            "type": "number",
            "description": "Minimum xi denominator",
            "exclusiveMinimum": 0.0,
        },
        "relation_epsilon": {
            "type": "number",
            "description": "Lightlike tolerance on the interval",
            "minimum": 0.0,
        },
        "boost_coherence_drift": _unit("Coherence factor per boost (1.0 disables)", exclusive_min=True),
        "switch_causality_cost": _unit("Causality factor per quantum switch", exclusive_min=True),
        "healing_chi": {
            "type": "number",
            "description": "Phase-conjugate healing constant",
            "exclusiveMinimum": 0.0,
            "exclusiveMaximum": 1.0,
        },
        "heal_coherence_threshold": _unit("Heal below this coherence"),
        "heal_causality_threshold": _unit("Heal below this causality"),
        "heal_coherence_cap": _unit("Upper bound for healed coherence"),
        "tenant_id": {"type": "string", "minLength": 1},
        "config_name": {"type": "string", "minLength": 1},
    },
    "additionalProperties": False,
}

# Compiled once at import
Draft202012Validator.check_schema(_JSON_SCHEMA)
_COMPILED_VALIDATOR = Draft202012Validator(_JSON_SCHEMA)

_KNOWN_FIELDS = frozenset(f.name for f in fields(EngineConfig))


def schema() -> Dict[str, Any]:
    """Returns JSON Schema dict for external validation."""
    return json.loads(json.dumps(_JSON_SCHEMA))


# =============================================================================
# Module-Level Functions
# =============================================================================

def load(path: str, strict: bool = False) -> EngineConfig:
    """
    Load config from a JSON or YAML file.

    Args:
        path: Path to config file (.json, .yaml, .yml)
        strict: If True, raise on invalid; if False, self-heal with warnings

    Returns:
        Validated, frozen EngineConfig

    Raises:
        FileNotFoundError: If path doesn't exist
        ValueError: If validation fails (always in strict mode, after healing otherwise)
    """
    path_obj = Path(path)

    if not path_obj.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    content = path_obj.read_text()

    if path_obj.suffix in ('.yaml', '.yml'):
        data = yaml.safe_load(content) or {}
    else:
        data = json.loads(content)

    if not isinstance(data, dict):
        raise ValueError(f"Config root must be a mapping, got {type(data).__name__}")

    return from_dict(data, strict=strict)


def from_dict(data: Dict[str, Any], strict: bool = False) -> EngineConfig:
    """
    Create EngineConfig from a dictionary. Same validation as load().

    A "preset" key (DEFAULT, DRIFT_FREE, FLAT) selects the base values the
    remaining keys override.
    """
    data = dict(data)
    preset_name = data.pop('preset', 'DEFAULT')
    if preset_name not in PRESETS:
        if strict:
            raise ValueError(f"Unknown preset '{preset_name}'. Must be one of: {sorted(PRESETS)}")
        warnings.warn(f"EngineConfig: unknown preset '{preset_name}', using DEFAULT",
                      UserWarning, stacklevel=2)
        preset_name = 'DEFAULT'

    return _create_config(data, PRESETS[preset_name], strict)


def default(name: str = 'DEFAULT') -> EngineConfig:
    """Return a named preset."""
    if name not in PRESETS:
        raise ValueError(f"Unknown preset '{name}'. Must be one of: {sorted(PRESETS)}")
    return PRESETS[name]


def to_dict(config: EngineConfig) -> Dict[str, Any]:
    """Export as dictionary."""
    return asdict(config)


def save(config: EngineConfig, path: str) -> None:
    """
    Write config to file.

    Args:
        config: EngineConfig to save
        path: File path to write to (.json or .yaml)
    """
    path_obj = Path(path)
    data = to_dict(config)
    if path_obj.suffix in ('.yaml', '.yml'):
        content = yaml.safe_dump(data, default_flow_style=False, sort_keys=True)
    else:
        content = json.dumps(data, indent=2, sort_keys=True)
    path_obj.write_text(content)


# =============================================================================
# Internal Validation Functions
# =============================================================================

def _validate(data: Dict[str, Any]) -> Tuple[bool, List[str], List[str]]:
    """
    Validate config data against the compiled schema.

    Returns: (is_valid, errors, warnings)

    Range violations are errors in strict mode and clampable in non-strict
    mode; type errors and unknown fields are errors either way until healed.
    """
    errors: List[str] = []
    warns: List[str] = []

    for err in _COMPILED_VALIDATOR.iter_errors(data):
        location = ".".join(str(p) for p in err.absolute_path) or "<root>"
        errors.append(f"{location}: {err.message}")

    heuristics = (
        ('heal_coherence_threshold', 'heal_coherence_cap',
         "heal_coherence_threshold above heal_coherence_cap: healed diamonds re-trigger healing"),
    )
    for low, high, message in heuristics:
        lo, hi = data.get(low), data.get(high)
        if isinstance(lo, (int, float)) and isinstance(hi, (int, float)) and lo > hi:
            warns.append(message)

    return len(errors) == 0, errors, warns


def _clamp_to_schema(key: str, value: Any, warns: List[str]) -> Any:
    prop = _JSON_SCHEMA['properties'][key]
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return value

    clamped = value
    if 'minimum' in prop and clamped < prop['minimum']:
        clamped = prop['minimum']
    if 'maximum' in prop and clamped > prop['maximum']:
        clamped = prop['maximum']
    if 'exclusiveMinimum' in prop and clamped <= prop['exclusiveMinimum']:
        clamped = None
    if 'exclusiveMaximum' in prop and clamped is not None and clamped >= prop['exclusiveMaximum']:
        clamped = None

    if clamped is None:
        warns.append(f"{key}={value} outside open range, using default")
    elif clamped != value:
        warns.append(f"Clamped {key} from {value} to {clamped}")
    if clamped is not None and prop.get('type') == 'integer':
        clamped = int(clamped)
    return clamped


def _self_heal(data: Dict[str, Any], warns: List[str]) -> Dict[str, Any]:
    """
    Apply self-healing to config data.

    Self-healing behavior:
    - Unknown field -> ignore, add warning
    - Out-of-range value -> clamp to valid range (or default), add warning
    - Wrong type -> default, add warning
    """
    healed: Dict[str, Any] = {}

    for key, value in data.items():
        if key not in _KNOWN_FIELDS:
            warns.append(f"Ignoring unknown field: {key}")
            continue

        expected = _JSON_SCHEMA['properties'][key]['type']
        if expected == 'string':
            ok = isinstance(value, str) and value != ""
        elif expected == 'integer':
            ok = (isinstance(value, int) or (isinstance(value, float) and value.is_integer())) \
                and not isinstance(value, bool)
        else:
            ok = isinstance(value, (int, float)) and not isinstance(value, bool)
        if not ok:
            warns.append(f"Invalid {key}={value!r}, using default")
            continue

        clamped = _clamp_to_schema(key, value, warns)
        if clamped is not None:
            healed[key] = clamped

    return healed


def _create_config(data: Dict[str, Any], base: EngineConfig, strict: bool) -> EngineConfig:
    """
    Internal factory for creating EngineConfig from data.

    Handles validation and self-healing.
    """
    all_warnings: List[str] = []

    is_valid, errors, warns = _validate(data)
    all_warnings.extend(warns)

    if not is_valid:
        if strict:
            raise ValueError("Config validation failed:\n" + "\n".join(f"  - {e}" for e in errors))
        data = _self_heal(data, all_warnings)
        is_valid, errors, _ = _validate(data)
        if not is_valid:
            raise ValueError("Config validation failed after self-healing:\n" +
                             "\n".join(f"  - {e}" for e in errors))

    for w in all_warnings:
        warnings.warn(f"EngineConfig: {w}", UserWarning, stacklevel=3)

    values = to_dict(base)
    values.update(data)
    for key in ('max_diamonds', 'receipt_ledger_max'):
        values[key] = int(values[key])
    return EngineConfig(**values)
