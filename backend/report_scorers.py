# -*- coding: utf-8 -*-
"""Factor scorers for questions asked against a personal daily report.

The report's 1-10 reading for the question's life area is the backbone of
the answer; transits, the Moon and retrogrades only add colour. Each scorer
takes ``(category, polarity, reading, report)`` and returns a list of
:class:`ScoringFactor`.
"""

import logging
from typing import Callable, List, Tuple

from oracle_config import cfg
from category_registry import ACTION_PLANETS, REPORT_RETROGRADE_CATEGORIES
from factor_scorers import round_points
from models import (
    Category, CategoryReading, DailyReport, Polarity, ScoringFactor, TransitImpact,
)

logger = logging.getLogger(__name__)

ReportScorer = Callable[[Category, Polarity, CategoryReading, DailyReport], List[ScoringFactor]]


def score_category_reading(area: Category, reading: CategoryReading) -> ScoringFactor:
    """Base points: distance of the area's reading from the midpoint"""
    settings = cfg().personal
    return ScoringFactor(
        description=f"{area.value} energy: {reading.score}/10",
        points=(reading.score - settings.base_midpoint) * settings.base_multiplier,
        source=f"Daily {area.value} score",
    )


def score_reading_polarity(category: Category, polarity: Polarity, reading: CategoryReading,
                           report: DailyReport) -> List[ScoringFactor]:
    settings = cfg().personal
    weights = settings.polarity
    high = reading.score >= settings.high_energy
    low = reading.score <= settings.low_energy

    if polarity == Polarity.PUSH:
        if high:
            return [ScoringFactor("Energy supports action", weights.push_supported, "Action polarity")]
        if low:
            return [ScoringFactor("Low energy for this", weights.push_low_energy, "Action polarity")]
    elif polarity == Polarity.PULL:
        if low:
            return [ScoringFactor("Good for rest", weights.pull_rest, "Action polarity")]
        if high:
            return [ScoringFactor("High energy resists rest", weights.pull_resisted, "Action polarity")]
    return []


def score_key_transits(category: Category, polarity: Polarity, reading: CategoryReading,
                       report: DailyReport) -> List[ScoringFactor]:
    """Transits the report flags for this category, with diminishing weight"""
    settings = cfg().personal
    relevant = [t for t in report.key_transits if category in t.affected_categories]

    factors = []
    for weight, transit in zip(settings.transit_weights, relevant):
        if transit.impact == TransitImpact.POSITIVE:
            base = settings.transit_points
        elif transit.impact == TransitImpact.NEGATIVE:
            base = -settings.transit_points
        else:
            base = 0
        factors.append(ScoringFactor(
            description=transit.interpretation,
            points=round_points(base * weight),
            source="Transit",
        ))
    return factors


def score_report_moon_phase(category: Category, polarity: Polarity, reading: CategoryReading,
                            report: DailyReport) -> List[ScoringFactor]:
    phase = report.moon_phase
    if phase is None:
        return []

    weights = cfg().personal.moon_phase
    # Only the named crescent and gibbous phases count as waxing or waning here
    waxing = phase.phase_name.startswith("Waxing")
    waning = phase.phase_name.startswith("Waning")

    factors = []
    if polarity == Polarity.PUSH and waning:
        factors.append(ScoringFactor(phase.phase_name, weights.push_waning, "Moon phase"))
    if polarity == Polarity.PUSH and waxing:
        factors.append(ScoringFactor(phase.phase_name, weights.push_waxing, "Moon phase"))
    if polarity == Polarity.PULL and waning:
        factors.append(ScoringFactor(phase.phase_name, weights.pull_waning, "Moon phase"))
    return factors


def score_report_retrogrades(category: Category, polarity: Polarity, reading: CategoryReading,
                             report: DailyReport) -> List[ScoringFactor]:
    penalty = cfg().personal.retrograde_penalty
    factors = []
    for planet in sorted(report.retrogrades, key=lambda p: p.value):
        hits_category = category in REPORT_RETROGRADE_CATEGORIES.get(planet, ())
        hits_action = planet in ACTION_PLANETS and polarity == Polarity.PUSH
        if hits_category or hits_action:
            factors.append(ScoringFactor(f"{planet.value} retrograde", penalty, "Retrograde"))
    return factors


REPORT_SCORERS: Tuple[ReportScorer, ...] = (
    score_reading_polarity,
    score_key_transits,
    score_report_moon_phase,
    score_report_retrogrades,
)


def run_report_scorers(category: Category, polarity: Polarity, reading: CategoryReading,
                       report: DailyReport) -> List[ScoringFactor]:
    factors: List[ScoringFactor] = []
    for scorer in REPORT_SCORERS:
        produced = scorer(category, polarity, reading, report)
        logger.debug(f"{scorer.__name__}: {len(produced)} factor(s)")
        factors.extend(produced)
    return factors
