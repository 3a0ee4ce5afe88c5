# -*- coding: utf-8 -*-
"""Independent factor scorers.

Each scorer takes ``(category, polarity, context, confidence)`` and returns
a list of :class:`ScoringFactor`. An empty list means the factor does not
apply. Scorers read the context but never modify it, and none of them looks
at another scorer's output.
"""

import math
import logging
from typing import Callable, List, Tuple

from oracle_config import cfg
from category_registry import (
    get_profile,
    BENEFICS,
    CONJUNCTION_MALEFICS,
    FORTUNE_MALEFICS,
    ACTION_PLANETS,
    PUSH_DAY_RULERS,
    PULL_DAY_RULERS,
    PUSH_MOON_SIGNS,
    PULL_MOON_SIGNS,
    DAY_NAMES,
    RETROGRADE_TIERS,
    RETROGRADE_DESCRIPTIONS,
)
from models import (
    AspectType, AstroContext, Category, DignityType, MoonPhase, Polarity,
    ScoringFactor, TransitAspect,
)

logger = logging.getLogger(__name__)

Scorer = Callable[[Category, Polarity, AstroContext, float], List[ScoringFactor]]

MOON_PHASE_DESCRIPTIONS = {
    MoonPhase.NEW_MOON: "New Moon favors new beginnings but lacks clarity",
    MoonPhase.WAXING_CRESCENT: "Waxing Crescent builds momentum",
    MoonPhase.FIRST_QUARTER: "First Quarter Moon brings challenges and tension",
    MoonPhase.WAXING_GIBBOUS: "Waxing Gibbous refines and adjusts",
    MoonPhase.FULL_MOON: "Full Moon illuminates but emotions run high",
    MoonPhase.WANING_GIBBOUS: "Waning Gibbous favors sharing wisdom, not starting",
    MoonPhase.LAST_QUARTER: "Last Quarter Moon prompts release and letting go",
    MoonPhase.WANING_CRESCENT: "Waning Crescent urges rest and reflection",
}


def round_points(value: float) -> int:
    """Round half up, so 16.5 -> 17 and -2.5 -> -2"""
    return int(math.floor(value + 0.5))


def angular_separation(lon1: float, lon2: float) -> float:
    """Shortest arc between two ecliptic longitudes, in [0, 180]"""
    diff = abs(lon1 - lon2) % 360
    if diff > 180:
        diff = 360 - diff
    return diff


# ---------------- Transits -----------------

def _transit_base_points(transit: TransitAspect) -> float:
    config = cfg()
    base = config.get(f"aspect_points.{transit.aspect.config_key}", 0)

    if transit.aspect == AspectType.CONJUNCTION:
        if transit.transit_planet in BENEFICS:
            return abs(base)
        if transit.transit_planet in CONJUNCTION_MALEFICS:
            return -abs(base) / config.transits.malefic_conjunction_divisor
    return base


def score_transit(transit: TransitAspect, category: Category):
    """Score one transit aspect, or None when neither planet matters to the category"""
    config = cfg()
    profile = get_profile(category)

    transit_relevant = profile.is_relevant(transit.transit_planet)
    natal_relevant = profile.is_relevant(transit.natal_planet)
    if not transit_relevant and not natal_relevant:
        return None

    # Tighter orbs are stronger; the effect fades to nothing at max_orb
    orb_factor = max(0.0, 1 - abs(transit.orb) / config.transits.max_orb)
    points = round_points(_transit_base_points(transit) * orb_factor)

    if transit_relevant and natal_relevant:
        points = round_points(points * config.transits.double_relevance_multiplier)

    if transit.applying:
        points = round_points(points * config.transits.applying_multiplier)

    tp = transit.transit_planet.value
    np_ = transit.natal_planet.value
    return ScoringFactor(
        description=f"{tp} {transit.aspect.verb} natal {np_}",
        points=points,
        source=f"{tp} {transit.aspect.display_name} {np_} ({transit.orb:g}° orb)",
    )


def score_transits(category: Category, polarity: Polarity, context: AstroContext,
                   confidence: float) -> List[ScoringFactor]:
    """Score the most significant transits (the context lists them tightest first)"""
    limit = cfg().transits.max_considered
    factors = []
    for transit in context.transits[:limit]:
        factor = score_transit(transit, category)
        if factor is not None:
            factors.append(factor)
    return factors


# ---------------- Retrogrades -----------------

def score_retrogrades(category: Category, polarity: Polarity, context: AstroContext,
                      confidence: float) -> List[ScoringFactor]:
    config = cfg()
    factors = []

    for planet, tiers in RETROGRADE_TIERS.items():
        if planet not in context.retrogrades:
            continue

        key = planet.value.lower()
        if category in tiers.get("severe", ()):
            points = config.get(f"retrograde.{key}.severe")
        elif category in tiers.get("mild", ()):
            points = config.get(f"retrograde.{key}.mild")
        else:
            continue

        if not points:
            continue

        factors.append(ScoringFactor(
            description=RETROGRADE_DESCRIPTIONS.get(planet, f"{planet.value} retrograde"),
            points=points,
            source=f"{planet.value} is retrograde",
        ))

    return factors


# ---------------- Moon -----------------

def score_moon_phase(category: Category, polarity: Polarity, context: AstroContext,
                     confidence: float) -> List[ScoringFactor]:
    phase = context.moon_phase
    if phase is None:
        return []

    return [ScoringFactor(
        description=MOON_PHASE_DESCRIPTIONS[phase],
        points=cfg().get(f"moon_phase.{phase.config_key}", 0),
        source=f"{phase.phase_name} phase",
    )]


def score_moon_sign(category: Category, polarity: Polarity, context: AstroContext,
                    confidence: float) -> List[ScoringFactor]:
    sign = context.moon_sign
    if sign is None:
        return []

    config = cfg()
    profile = get_profile(category)

    if sign in profile.supportive_signs:
        return [ScoringFactor(
            description=f"Moon in {sign.sign_name} supports {category.value} matters",
            points=config.moon_sign.support,
            source=f"Moon in {sign.sign_name}",
        )]

    if sign in profile.challenging_signs:
        return [ScoringFactor(
            description=f"Moon in {sign.sign_name} complicates {category.value} matters",
            points=config.moon_sign.challenge,
            source=f"Moon in {sign.sign_name}",
        )]

    return []


# ---------------- Day ruler -----------------

def score_day_ruler(category: Category, polarity: Polarity, context: AstroContext,
                    confidence: float) -> List[ScoringFactor]:
    ruler = context.day_ruler
    if ruler is None:
        return []

    bonus = get_profile(category).day_ruler_bonus.get(ruler, 0)
    if not bonus:
        return []

    config = cfg()
    # Weak-signal questions only get part of a favourable day's boost
    if bonus > 0 and confidence < config.confidence.weak_signal_below:
        bonus = round_points(bonus * config.confidence.day_ruler_low_confidence_scale)

    day_name = DAY_NAMES.get(ruler, ruler.value)
    verb = "favors" if bonus > 0 else "challenges"
    return [ScoringFactor(
        description=f"{day_name} ({ruler.value}'s day) {verb} {category.value}",
        points=bonus,
        source=f"Day ruler: {ruler.value}",
    )]


# ---------------- Natal chart -----------------

def score_dignities(category: Category, polarity: Polarity, context: AstroContext,
                    confidence: float) -> List[ScoringFactor]:
    profile = get_profile(category)
    multiplier = cfg().dignity.multiplier
    factors = []

    for dignity in context.dignities:
        if dignity.dignity == DignityType.NEUTRAL:
            continue
        if not profile.is_relevant(dignity.planet):
            continue

        points = dignity.strength * multiplier
        if not points:
            continue

        factors.append(ScoringFactor(
            description=f"{dignity.planet.value} in {dignity.dignity.value}",
            points=points,
            source=f"{dignity.planet.value} dignity: {dignity.dignity.value} (strength: {dignity.strength})",
        ))

    return factors


def score_patterns(category: Category, polarity: Polarity, context: AstroContext,
                   confidence: float) -> List[ScoringFactor]:
    config = cfg()
    profile = get_profile(category)
    factors = []

    for info in context.patterns:
        if not any(profile.is_relevant(planet) for planet in info.planets):
            continue

        points = config.get(f"patterns.{info.pattern.config_key}", 0)
        if not points:
            continue

        planets = ", ".join(planet.value for planet in info.planets)
        source = f"{info.pattern.pattern_name}: {planets}"
        if info.description:
            source += f" - {info.description}"

        factors.append(ScoringFactor(
            description=f"{info.pattern.pattern_name} pattern active",
            points=points,
            source=source,
        ))

    return factors


# ---------------- Sensitive points -----------------

def score_lunar_nodes(category: Category, polarity: Polarity, context: AstroContext,
                      confidence: float) -> List[ScoringFactor]:
    nodes = context.lunar_nodes
    moon = context.moon_placement
    if nodes is None or moon is None:
        return []

    config = cfg()
    orb = config.lunar_nodes.orb

    if angular_separation(moon.longitude, nodes.north_longitude) < orb:
        return [ScoringFactor(
            description="Moon aligned with North Node - karmic support",
            points=config.lunar_nodes.north_node,
            source="Moon conjunct North Node (fated/karmic energy)",
        )]

    if angular_separation(moon.longitude, nodes.south_longitude) < orb:
        return [ScoringFactor(
            description="Moon aligned with South Node - past patterns emerge",
            points=config.lunar_nodes.south_node,
            source="Moon conjunct South Node (karmic release)",
        )]

    return []


def score_part_of_fortune(category: Category, polarity: Polarity, context: AstroContext,
                          confidence: float) -> List[ScoringFactor]:
    """First benefic or malefic placement within orb of the fortune point wins"""
    fortune = context.part_of_fortune
    if fortune is None:
        return []

    config = cfg()
    for placement in context.placements:
        if angular_separation(placement.longitude, fortune.longitude) >= config.part_of_fortune.orb:
            continue

        name = placement.planet.value
        if placement.planet in BENEFICS:
            return [ScoringFactor(
                description=f"{name} activates Part of Fortune - luck amplified",
                points=config.part_of_fortune.benefic,
                source=f"{name} conjunct Part of Fortune",
            )]
        if placement.planet in FORTUNE_MALEFICS:
            return [ScoringFactor(
                description=f"{name} challenges Part of Fortune",
                points=config.part_of_fortune.malefic,
                source=f"{name} conjunct Part of Fortune",
            )]

    return []


# ---------------- Action polarity -----------------

def score_polarity_alignment(category: Category, polarity: Polarity, context: AstroContext,
                             confidence: float) -> List[ScoringFactor]:
    """Reward push/pull questions asked under matching cosmic timing.

    Push questions want a waxing Moon, an active day ruler and a fire or
    cardinal Moon sign; pull questions want the opposite. A retrograde
    action planet weighs on every push question.
    """
    if polarity == Polarity.NEUTRAL:
        return []

    weights = cfg().polarity
    factors: List[ScoringFactor] = []
    push = polarity == Polarity.PUSH
    label = polarity.value

    phase = context.moon_phase
    if phase is not None:
        aligned = phase.waxing if push else phase.waning
        if aligned:
            factors.append(ScoringFactor(
                description=("Waxing moon supports action and initiative" if push
                             else "Waning moon supports rest and retreat"),
                points=weights.push_waxing if push else weights.pull_waning,
                source=f"{phase.phase_name} aligns with {label} energy",
            ))
        else:
            factors.append(ScoringFactor(
                description=("Waning moon resists new initiatives - better for winding down" if push
                             else "Waxing moon resists pulling back - energy wants to build"),
                points=weights.push_waning if push else weights.pull_waxing,
                source=f"{phase.phase_name} conflicts with {label} energy",
            ))

    ruler = context.day_ruler
    if ruler is not None:
        aligned_rulers = PUSH_DAY_RULERS if push else PULL_DAY_RULERS
        opposed_rulers = PULL_DAY_RULERS if push else PUSH_DAY_RULERS
        if ruler in aligned_rulers:
            factors.append(ScoringFactor(
                description=(f"{ruler.value}'s day favors action and effort" if push
                             else f"{ruler.value}'s day supports rest and retreat"),
                points=weights.day_ruler_aligned,
                source=f"Day ruler {ruler.value} aligns with {label} energy",
            ))
        elif ruler in opposed_rulers:
            factors.append(ScoringFactor(
                description=(f"{ruler.value}'s day favors rest over action" if push
                             else f"{ruler.value}'s day resists pulling back"),
                points=weights.day_ruler_conflict,
                source=f"Day ruler {ruler.value} conflicts with {label} energy",
            ))

    sign = context.moon_sign
    if sign is not None and sign in (PUSH_MOON_SIGNS if push else PULL_MOON_SIGNS):
        factors.append(ScoringFactor(
            description=(f"Moon in {sign.sign_name} supports taking action" if push
                         else f"Moon in {sign.sign_name} supports rest and flow"),
            points=weights.moon_sign_aligned,
            source=f"Moon sign {sign.sign_name} aligns with {label}",
        ))

    if push:
        for planet in sorted(ACTION_PLANETS & context.retrogrades, key=lambda p: p.value):
            factors.append(ScoringFactor(
                description=f"{planet.value} retrograde hampers new initiatives and effort",
                points=weights.action_planet_retrograde,
                source=f"{planet.value} retrograde conflicts with push energy",
            ))

    return factors


FACTOR_SCORERS: Tuple[Scorer, ...] = (
    score_polarity_alignment,
    score_transits,
    score_retrogrades,
    score_moon_phase,
    score_moon_sign,
    score_day_ruler,
    score_dignities,
    score_patterns,
    score_lunar_nodes,
    score_part_of_fortune,
)


def run_scorers(category: Category, polarity: Polarity, context: AstroContext,
                confidence: float) -> List[ScoringFactor]:
    """Run every scorer and concatenate the results"""
    factors: List[ScoringFactor] = []
    for scorer in FACTOR_SCORERS:
        produced = scorer(category, polarity, context, confidence)
        logger.debug(f"{scorer.__name__}: {len(produced)} factor(s)")
        factors.extend(produced)
    return factors
