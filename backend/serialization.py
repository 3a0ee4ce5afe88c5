# -*- coding: utf-8 -*-
"""Conversion between JSON payloads and engine models."""

from types import MappingProxyType
from typing import Any, Dict, List, Optional

from models import (
    AspectType, AstroContext, Category, CategoryReading, DailyReport, DignityType,
    KeyTransit, LunarNodes, MoonPhase, PatternInfo, PatternType, Placement, Planet,
    PlanetaryDignity, QuestionAnalysis, ScoringFactor, ScoringResult, SensitivePoint,
    Sign, TransitAspect, TransitImpact,
)


class ContextFormatError(ValueError):
    """The payload does not have the shape of an astrological context"""
    pass


def _require(data: Dict[str, Any], key: str, where: str) -> Any:
    if key not in data:
        raise ContextFormatError(f"{where}: missing '{key}'")
    return data[key]


def _as_list(value: Any, where: str) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ContextFormatError(f"{where} must be a list")
    return value


def _as_mapping(value: Any, where: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ContextFormatError(f"{where} must be an object")
    return value


def _point(data: Any, where: str) -> SensitivePoint:
    data = _as_mapping(data, where)
    return SensitivePoint(
        sign=Sign.from_name(_require(data, "sign", where)),
        degree=float(_require(data, "degree", where)),
        minute=float(data.get("minute", 0)),
    )


def _transit(data: Any) -> TransitAspect:
    data = _as_mapping(data, "transit")
    applying = data.get("applying", False)
    if not isinstance(applying, bool):
        raise ContextFormatError(f"transit: 'applying' must be true or false, got {applying!r}")
    return TransitAspect(
        transit_planet=Planet.from_name(_require(data, "transit_planet", "transit")),
        natal_planet=Planet.from_name(_require(data, "natal_planet", "transit")),
        aspect=AspectType.from_name(_require(data, "type", "transit")),
        orb=float(_require(data, "orb", "transit")),
        applying=applying,
    )


def _placement(data: Any) -> Placement:
    data = _as_mapping(data, "placement")
    return Placement(
        planet=Planet.from_name(_require(data, "planet", "placement")),
        sign=Sign.from_name(_require(data, "sign", "placement")),
        degree=float(_require(data, "degree", "placement")),
        minute=float(data.get("minute", 0)),
    )


def _dignity(data: Any) -> PlanetaryDignity:
    data = _as_mapping(data, "dignity")
    return PlanetaryDignity(
        planet=Planet.from_name(_require(data, "planet", "dignity")),
        dignity=DignityType(str(_require(data, "dignity", "dignity")).lower()),
        strength=int(data.get("strength", 0)),
    )


def _pattern(data: Any) -> PatternInfo:
    data = _as_mapping(data, "pattern")
    planets = _as_list(_require(data, "planets", "pattern"), "pattern.planets")
    return PatternInfo(
        pattern=PatternType.from_name(_require(data, "pattern", "pattern")),
        planets=tuple(Planet.from_name(p) for p in planets),
        description=str(data.get("description", "")),
    )


def context_from_dict(payload: Any) -> AstroContext:
    """Build an AstroContext from its JSON form.

    Optional sections may be omitted or null. Unknown planets, signs or
    aspect names raise ContextFormatError.
    """
    payload = _as_mapping(payload, "context")

    try:
        nodes_data = payload.get("lunar_nodes")
        lunar_nodes: Optional[LunarNodes] = None
        if nodes_data is not None:
            nodes_data = _as_mapping(nodes_data, "lunar_nodes")
            south = nodes_data.get("south_node")
            lunar_nodes = LunarNodes(
                north_node=_point(_require(nodes_data, "north_node", "lunar_nodes"), "north_node"),
                south_node=_point(south, "south_node") if south is not None else None,
            )

        fortune = payload.get("part_of_fortune")
        phase = payload.get("moon_phase")
        ruler = payload.get("day_ruler")

        return AstroContext(
            transits=tuple(_transit(t) for t in _as_list(payload.get("transits"), "transits")),
            retrogrades=frozenset(
                Planet.from_name(p) for p in _as_list(payload.get("retrogrades"), "retrogrades")
            ),
            moon_phase=MoonPhase.from_name(phase) if phase else None,
            placements=tuple(_placement(p) for p in _as_list(payload.get("placements"), "placements")),
            day_ruler=Planet.from_name(ruler) if ruler else None,
            dignities=tuple(_dignity(d) for d in _as_list(payload.get("dignities"), "dignities")),
            patterns=tuple(_pattern(p) for p in _as_list(payload.get("patterns"), "patterns")),
            lunar_nodes=lunar_nodes,
            part_of_fortune=_point(fortune, "part_of_fortune") if fortune is not None else None,
        )
    except ContextFormatError:
        raise
    except (ValueError, TypeError) as e:
        raise ContextFormatError(str(e)) from e


def _reading(data: Any, where: str) -> CategoryReading:
    data = _as_mapping(data, where)
    score = _require(data, "score", where)
    if isinstance(score, bool) or not isinstance(score, int) or not 1 <= score <= 10:
        raise ContextFormatError(f"{where}: 'score' must be an integer from 1 to 10, got {score!r}")
    return CategoryReading(
        score=score,
        advice=str(data.get("advice", "")),
        good_for=tuple(str(s) for s in _as_list(data.get("good_for"), f"{where}.good_for")),
        bad_for=tuple(str(s) for s in _as_list(data.get("bad_for"), f"{where}.bad_for")),
    )


def _key_transit(data: Any) -> KeyTransit:
    data = _as_mapping(data, "key_transit")
    affected = _as_list(_require(data, "affected_categories", "key_transit"),
                        "key_transit.affected_categories")
    return KeyTransit(
        interpretation=str(_require(data, "interpretation", "key_transit")),
        affected_categories=frozenset(Category(str(c).lower()) for c in affected),
        impact=TransitImpact(str(data.get("impact", "neutral")).lower()),
    )


def report_from_dict(payload: Any) -> DailyReport:
    """Build a DailyReport from its JSON form.

    ``categories`` maps life-area names to ``{score, advice, good_for,
    bad_for}``; scores are integers from 1 to 10.
    """
    payload = _as_mapping(payload, "report")

    try:
        categories = _as_mapping(_require(payload, "categories", "report"), "report.categories")
        readings = {
            Category(str(name).lower()): _reading(value, f"categories.{name}")
            for name, value in categories.items()
        }

        phase = payload.get("moon_phase")
        overall = payload.get("overall_score")

        return DailyReport(
            categories=MappingProxyType(readings),
            key_transits=tuple(
                _key_transit(t) for t in _as_list(payload.get("key_transits"), "key_transits")
            ),
            moon_phase=MoonPhase.from_name(phase) if phase else None,
            retrogrades=frozenset(
                Planet.from_name(p) for p in _as_list(payload.get("retrogrades"), "retrogrades")
            ),
            overall_score=int(overall) if overall is not None else None,
            headline=str(payload.get("headline", "")),
        )
    except ContextFormatError:
        raise
    except (ValueError, TypeError) as e:
        raise ContextFormatError(str(e)) from e


def factor_to_dict(factor: ScoringFactor) -> Dict[str, Any]:
    return {
        "description": factor.description,
        "points": factor.points,
        "source": factor.source,
    }


def result_to_dict(result: ScoringResult) -> Dict[str, Any]:
    """Structured result for prose generators and UI layers"""
    return {
        "verdict": result.verdict.code,
        "verdict_label": result.verdict.label,
        "score": result.score,
        "category": result.category.value,
        "factors": [factor_to_dict(f) for f in result.factors],
    }


def analysis_to_dict(analysis: QuestionAnalysis) -> Dict[str, Any]:
    return {
        "question": analysis.question,
        "category": analysis.category.value,
        "confidence": analysis.confidence,
        "polarity": analysis.polarity.value,
        "negative_intent": analysis.negative_intent,
    }
