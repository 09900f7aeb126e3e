from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from skillmap.core.config import settings

logger = logging.getLogger(__name__)

_MATCHING_CONFIG_CACHE: dict[str, Any] | None = None
_DEFAULT_MATCHING_CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "matching.yaml"


@dataclass(frozen=True, slots=True)
class MatcherThresholds:
    fallback_trigger: float = 0.5
    fallback_confidence: float = 0.6
    fallback_min_token_length: int = 3
    normalize_floor: float = 0.5


@dataclass(frozen=True, slots=True)
class SuggestionPolicy:
    min_query_length: int = 3
    min_confidence: float = 0.5


@dataclass(frozen=True, slots=True)
class ConfidenceTiers:
    high: float = 0.8
    medium: float = 0.6


def _config_path() -> tuple[Path, bool]:
    if settings.matching_config_path:
        return Path(settings.matching_config_path), True
    return _DEFAULT_MATCHING_CONFIG_PATH, False


def get_matching_config() -> dict[str, Any]:
    """Load matcher thresholds from config/matching.yaml and cache them.

    A missing file is an error only when MATCHING_CONFIG_PATH points at it;
    without the override the built-in defaults apply.
    """
    global _MATCHING_CONFIG_CACHE

    if _MATCHING_CONFIG_CACHE is not None:
        return _MATCHING_CONFIG_CACHE

    path, explicit = _config_path()
    if not path.exists():
        if explicit:
            raise RuntimeError(f"Matching config not found at '{path}'.")
        logger.info("matching_config_missing path=%s using_defaults=true", path)
        _MATCHING_CONFIG_CACHE = {}
        return _MATCHING_CONFIG_CACHE

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RuntimeError(f"Failed to read matching config '{path}': {exc}") from exc

    try:
        parsed = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"Invalid YAML in matching config '{path}': {exc}") from exc

    if parsed is None:
        parsed = {}
    if not isinstance(parsed, dict):
        raise RuntimeError(f"Invalid matching config '{path}': expected a top-level mapping.")

    _MATCHING_CONFIG_CACHE = parsed
    return _MATCHING_CONFIG_CACHE


def clear_matching_config_cache() -> None:
    global _MATCHING_CONFIG_CACHE
    _MATCHING_CONFIG_CACHE = None


def get_matching_value(path: str, default: Any = None) -> Any:
    """Get nested config value using dot path notation, e.g. 'tiers.high'."""
    if not path:
        return default

    current: Any = get_matching_config()
    for key in path.split("."):
        if not isinstance(current, dict):
            return default
        if key not in current:
            return default
        current = current[key]
    return current


def _float(path: str, default: float) -> float:
    value = get_matching_value(path, default)
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise RuntimeError(f"Matching config value '{path}' must be a number, got {value!r}.") from exc


def _int(path: str, default: int) -> int:
    value = get_matching_value(path, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise RuntimeError(f"Matching config value '{path}' must be an integer, got {value!r}.")
    return value


def get_matcher_thresholds() -> MatcherThresholds:
    defaults = MatcherThresholds()
    return MatcherThresholds(
        fallback_trigger=_float("matching.fallback_trigger", defaults.fallback_trigger),
        fallback_confidence=_float("matching.fallback_confidence", defaults.fallback_confidence),
        fallback_min_token_length=_int("matching.fallback_min_token_length", defaults.fallback_min_token_length),
        normalize_floor=_float("matching.normalize_floor", defaults.normalize_floor),
    )


def get_suggestion_policy() -> SuggestionPolicy:
    defaults = SuggestionPolicy()
    return SuggestionPolicy(
        min_query_length=_int("suggestions.min_query_length", defaults.min_query_length),
        min_confidence=_float("suggestions.min_confidence", defaults.min_confidence),
    )


def get_confidence_tiers() -> ConfidenceTiers:
    defaults = ConfidenceTiers()
    return ConfidenceTiers(
        high=_float("tiers.high", defaults.high),
        medium=_float("tiers.medium", defaults.medium),
    )
