# -*- coding: utf-8 -*-
"""YAML-backed constant table for the oracle scoring engine.

All tunable numbers (aspect points, thresholds, multipliers, variance range)
live in ``oracle_constants.yaml`` so behaviour changes are diffable
separately from logic changes. The file can be swapped with the
``ORACLE_CONFIG`` environment variable.
"""

import os
import logging
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "oracle_constants.yaml"

HARMONIOUS_PATTERN_KEYS = ("grand_trine", "stellium")
STRESSFUL_PATTERN_KEYS = ("t_square", "grand_cross", "yod")


class OracleError(Exception):
    """Raised for missing, unreadable or inconsistent configuration"""
    pass


def _to_namespace(value: Any) -> Any:
    if isinstance(value, dict):
        return SimpleNamespace(**{str(k): _to_namespace(v) for k, v in value.items()})
    if isinstance(value, list):
        return [_to_namespace(v) for v in value]
    return value


class OracleConfig:
    """Singleton access to the oracle constant table"""

    _instance: Optional["OracleConfig"] = None

    REQUIRED_KEYS: List[str] = [
        "version",
        "classification.default_category",
        "classification.high_confidence",
        "classification.low_confidence",
        "confidence.unclassifiable_below",
        "confidence.weak_signal_below",
        "confidence.weak_signal_penalty",
        "confidence.day_ruler_low_confidence_scale",
        "score.min",
        "score.max",
        "variance.min",
        "variance.max",
        "verdict_thresholds.strongly_favorable",
        "verdict_thresholds.mildly_favorable",
        "verdict_thresholds.ambiguous",
        "verdict_thresholds.mildly_unfavorable",
        "transits.max_considered",
        "transits.max_orb",
        "transits.double_relevance_multiplier",
        "transits.applying_multiplier",
        "transits.malefic_conjunction_divisor",
        "aspect_points.conjunction",
        "aspect_points.sextile",
        "aspect_points.square",
        "aspect_points.trine",
        "aspect_points.opposition",
        "moon_sign.support",
        "moon_sign.challenge",
        "dignity.multiplier",
        "patterns.grand_trine",
        "patterns.t_square",
        "lunar_nodes.orb",
        "part_of_fortune.orb",
        "polarity.push_waxing",
        "polarity.action_planet_retrograde",
        "personal.base_midpoint",
        "personal.base_multiplier",
        "personal.transit_points",
        "personal.transit_weights",
        "personal.retrograde_penalty",
        "personal.verdict_bands.strongly_favorable",
        "personal.verdict_bands.mildly_favorable",
        "personal.verdict_bands.ambiguous",
        "personal.verdict_bands.mildly_unfavorable",
        "personal.nudge.ambiguous",
        "personal.nudge.strengthen",
    ]

    def __new__(cls):
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._load()
            cls._instance = instance
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the cached instance so the next access reloads from disk"""
        cls._instance = None

    def _load(self) -> None:
        path = Path(os.environ.get("ORACLE_CONFIG", DEFAULT_CONFIG_PATH))
        self.config_path = path

        try:
            with open(path, "r", encoding="utf-8") as handle:
                data = yaml.safe_load(handle)
        except FileNotFoundError as e:
            raise OracleError(f"Configuration file not found: {path}") from e
        except yaml.YAMLError as e:
            raise OracleError(f"Invalid YAML in {path}: {e}") from e

        if not isinstance(data, dict):
            raise OracleError(f"Configuration root must be a mapping: {path}")

        self._data: Dict[str, Any] = data
        self._namespace = _to_namespace(data)
        logger.debug(f"Loaded oracle constants v{data.get('version')} from {path}")

        if os.environ.get("ORACLE_CONFIG_SKIP_VALIDATION") != "true":
            self.validate_required_keys()

    def __getattr__(self, name: str) -> Any:
        # Only reached for attributes not set on the instance
        namespace = self.__dict__.get("_namespace")
        if namespace is None or not hasattr(namespace, name):
            raise AttributeError(name)
        return getattr(namespace, name)

    @property
    def data(self) -> Dict[str, Any]:
        return self._data

    def get(self, key: str, default: Any = None) -> Any:
        """Return a value by dotted key, e.g. ``transits.max_orb``"""
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def validate_required_keys(self) -> None:
        """Check that every required key exists and the tuning invariants hold"""
        missing = [key for key in self.REQUIRED_KEYS if self.get(key) is None]
        if missing:
            raise OracleError(f"Missing required configuration keys: {', '.join(missing)}")

        thresholds = [
            self.get("verdict_thresholds.strongly_favorable"),
            self.get("verdict_thresholds.mildly_favorable"),
            self.get("verdict_thresholds.ambiguous"),
            self.get("verdict_thresholds.mildly_unfavorable"),
        ]
        if any(a <= b for a, b in zip(thresholds, thresholds[1:])):
            raise OracleError(f"Verdict thresholds must be strictly descending: {thresholds}")
        if not self.get("score.min") < thresholds[-1] <= thresholds[0] <= self.get("score.max"):
            raise OracleError("Verdict thresholds must fall inside the score range")

        if self.get("variance.min") > self.get("variance.max"):
            raise OracleError("Variance range is inverted")

        if self.get("confidence.unclassifiable_below") > self.get("confidence.weak_signal_below"):
            raise OracleError("Unclassifiable floor must not exceed the weak-signal threshold")

        harmonious = max(self.get("aspect_points.trine"), self.get("aspect_points.sextile"))
        stressful = min(abs(self.get("aspect_points.square")), abs(self.get("aspect_points.opposition")))
        if harmonious >= stressful:
            raise OracleError("Harmonious aspect points must stay below stressful aspect penalties")

        patterns = self.get("patterns", {})
        pattern_bonus = max(patterns[key] for key in HARMONIOUS_PATTERN_KEYS if key in patterns)
        pattern_penalty = min(abs(patterns[key]) for key in STRESSFUL_PATTERN_KEYS if key in patterns)
        if pattern_bonus >= pattern_penalty:
            raise OracleError("Harmonious pattern points must stay below stressful pattern penalties")

        bands = [
            self.get("personal.verdict_bands.strongly_favorable"),
            self.get("personal.verdict_bands.mildly_favorable"),
            self.get("personal.verdict_bands.ambiguous"),
            self.get("personal.verdict_bands.mildly_unfavorable"),
        ]
        if any(a <= b for a, b in zip(bands, bands[1:])):
            raise OracleError(f"Personal verdict bands must be strictly descending: {bands}")


def get_config() -> OracleConfig:
    """Return the shared configuration object"""
    return OracleConfig()


def cfg() -> OracleConfig:
    """Shorthand used throughout the engine: ``cfg().transits.max_orb``"""
    return OracleConfig()
