import os
import sys

import pytest

# Add backend directory to path
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'backend'))

from judgment_engine import (
    ScoreDecisionEngine,
    nudge_verdict,
    reading_to_verdict,
    score_personal_decision,
)
from report_scorers import (
    REPORT_SCORERS,
    score_category_reading,
    score_key_transits,
    score_reading_polarity,
    score_report_moon_phase,
    score_report_retrogrades,
)
from models import (
    Category, CategoryReading, DailyReport, KeyTransit, MoonPhase, Planet, Polarity,
    QuestionAnalysis, TransitImpact, Verdict,
)

PUSH = Polarity.PUSH
PULL = Polarity.PULL
NEUTRAL = Polarity.NEUTRAL


class StubAnalyzer:
    def __init__(self, category, polarity=NEUTRAL, confidence=0.8, negative=False):
        self.category = category
        self.polarity = polarity
        self.confidence = confidence
        self.negative = negative

    def analyze_question(self, question):
        return QuestionAnalysis(question, self.category, self.confidence,
                                self.polarity, self.negative)


def _report(readings, **kwargs):
    categories = {area: CategoryReading(score=score) for area, score in readings.items()}
    return DailyReport(categories=categories, **kwargs)


def _transit(impact, *categories, text="Venus trine natal Sun"):
    return KeyTransit(text, frozenset(categories), impact)


def _points(factors):
    return [f.points for f in factors]


def _personal(category, report, polarity=NEUTRAL, **kwargs):
    engine = ScoreDecisionEngine(analyzer=StubAnalyzer(category, polarity, **kwargs))
    return engine.score_personal("anything", report)


class TestReadingFactors:
    @pytest.mark.parametrize("score,expected", [(1, -40), (5, 0), (8, 30), (10, 50)])
    def test_base_points_track_distance_from_midpoint(self, score, expected):
        factor = score_category_reading(Category.LOVE, CategoryReading(score=score))
        assert factor.points == expected
        assert factor.description == f"love energy: {score}/10"
        assert factor.source == "Daily love score"

    @pytest.mark.parametrize("polarity,score,expected", [
        (PUSH, 7, [10]),
        (PUSH, 9, [10]),
        (PUSH, 5, []),
        (PUSH, 4, [-15]),
        (PULL, 3, [15]),
        (PULL, 6, []),
        (PULL, 8, [-10]),
        (NEUTRAL, 9, []),
        (NEUTRAL, 2, []),
    ])
    def test_polarity_against_energy(self, polarity, score, expected):
        reading = CategoryReading(score=score)
        factors = score_reading_polarity(Category.HEALTH, polarity, reading, _report({}))
        assert _points(factors) == expected
        assert all(f.source == "Action polarity" for f in factors)

    def test_first_three_relevant_transits_with_diminishing_weight(self):
        report = _report({}, key_transits=(
            _transit(TransitImpact.POSITIVE, Category.MONEY, text="first"),
            _transit(TransitImpact.POSITIVE, Category.LOVE, text="elsewhere"),
            _transit(TransitImpact.NEGATIVE, Category.MONEY, Category.CAREER, text="second"),
            _transit(TransitImpact.POSITIVE, Category.MONEY, text="third"),
            _transit(TransitImpact.POSITIVE, Category.MONEY, text="fourth"),
        ))
        factors = score_key_transits(Category.MONEY, NEUTRAL, CategoryReading(5), report)

        assert [f.description for f in factors] == ["first", "second", "third"]
        assert _points(factors) == [10, -6, 3]
        assert all(f.source == "Transit" for f in factors)

    def test_neutral_transit_still_listed(self):
        report = _report({}, key_transits=(_transit(TransitImpact.NEUTRAL, Category.LOVE),))
        factors = score_key_transits(Category.LOVE, PUSH, CategoryReading(5), report)
        assert _points(factors) == [0]

    def test_transits_match_the_question_category(self):
        # A communication question reads the social area but only its own transits
        report = _report({}, key_transits=(_transit(TransitImpact.POSITIVE, Category.SOCIAL),))
        assert score_key_transits(Category.COMMUNICATION, NEUTRAL, CategoryReading(5), report) == []

    @pytest.mark.parametrize("polarity,phase,expected", [
        (PUSH, MoonPhase.WANING_GIBBOUS, [-8]),
        (PUSH, MoonPhase.WANING_CRESCENT, [-8]),
        (PUSH, MoonPhase.WAXING_CRESCENT, [6]),
        (PUSH, MoonPhase.FULL_MOON, []),
        (PUSH, MoonPhase.NEW_MOON, []),
        (PULL, MoonPhase.WANING_GIBBOUS, [6]),
        (PULL, MoonPhase.WAXING_GIBBOUS, []),
        (NEUTRAL, MoonPhase.WANING_CRESCENT, []),
    ])
    def test_moon_phase(self, polarity, phase, expected):
        report = _report({}, moon_phase=phase)
        factors = score_report_moon_phase(Category.LOVE, polarity, CategoryReading(5), report)
        assert _points(factors) == expected
        for factor in factors:
            assert factor.description == phase.phase_name
            assert factor.source == "Moon phase"

    def test_no_moon_phase(self):
        assert score_report_moon_phase(Category.LOVE, PUSH, CategoryReading(5), _report({})) == []

    @pytest.mark.parametrize("category,polarity,retrogrades,expected", [
        (Category.CAREER, NEUTRAL, {Planet.MERCURY}, ["Mercury retrograde"]),
        (Category.COMMUNICATION, NEUTRAL, {Planet.MERCURY}, ["Mercury retrograde"]),
        (Category.LOVE, NEUTRAL, {Planet.MERCURY}, []),
        (Category.MONEY, NEUTRAL, {Planet.VENUS, Planet.MERCURY}, ["Venus retrograde"]),
        (Category.HEALTH, PUSH, {Planet.MARS}, ["Mars retrograde"]),
        (Category.HEALTH, PULL, {Planet.MARS}, []),
        (Category.LOVE, PUSH, {Planet.VENUS, Planet.MARS}, ["Mars retrograde", "Venus retrograde"]),
        (Category.SPIRITUAL, PUSH, {Planet.SATURN}, []),
    ])
    def test_retrogrades(self, category, polarity, retrogrades, expected):
        report = _report({}, retrogrades=frozenset(retrogrades))
        factors = score_report_retrogrades(category, polarity, CategoryReading(5), report)
        assert [f.description for f in factors] == expected
        assert all(f.points == -12 and f.source == "Retrograde" for f in factors)

    def test_scorer_order(self):
        assert REPORT_SCORERS[0] is score_reading_polarity
        assert REPORT_SCORERS[-1] is score_report_retrogrades


class TestReadingVerdicts:
    @pytest.mark.parametrize("score,expected", [
        (10, Verdict.STRONGLY_FAVORABLE),
        (8, Verdict.STRONGLY_FAVORABLE),
        (7, Verdict.MILDLY_FAVORABLE),
        (6, Verdict.AMBIGUOUS),
        (5, Verdict.MILDLY_UNFAVORABLE),
        (4, Verdict.MILDLY_UNFAVORABLE),
        (3, Verdict.STRONGLY_UNFAVORABLE),
        (1, Verdict.STRONGLY_UNFAVORABLE),
    ])
    def test_push_bands(self, score, expected):
        assert reading_to_verdict(score, PUSH) == expected
        assert reading_to_verdict(score, NEUTRAL) == expected

    @pytest.mark.parametrize("score,expected", [
        (1, Verdict.STRONGLY_FAVORABLE),
        (3, Verdict.STRONGLY_FAVORABLE),
        (4, Verdict.MILDLY_FAVORABLE),
        (5, Verdict.AMBIGUOUS),
        (6, Verdict.MILDLY_UNFAVORABLE),
        (8, Verdict.STRONGLY_UNFAVORABLE),
        (10, Verdict.STRONGLY_UNFAVORABLE),
    ])
    def test_pull_reads_the_scale_upside_down(self, score, expected):
        assert reading_to_verdict(score, PULL) == expected

    @pytest.mark.parametrize("verdict,score,expected", [
        (Verdict.AMBIGUOUS, 20, Verdict.MILDLY_FAVORABLE),
        (Verdict.AMBIGUOUS, 19, Verdict.AMBIGUOUS),
        (Verdict.AMBIGUOUS, -19, Verdict.AMBIGUOUS),
        (Verdict.AMBIGUOUS, -20, Verdict.MILDLY_UNFAVORABLE),
        (Verdict.MILDLY_UNFAVORABLE, -30, Verdict.STRONGLY_UNFAVORABLE),
        (Verdict.MILDLY_UNFAVORABLE, -29, Verdict.MILDLY_UNFAVORABLE),
        (Verdict.MILDLY_FAVORABLE, 30, Verdict.STRONGLY_FAVORABLE),
        (Verdict.MILDLY_FAVORABLE, 29, Verdict.MILDLY_FAVORABLE),
    ])
    def test_nudges(self, verdict, score, expected):
        assert nudge_verdict(verdict, score) == expected

    @pytest.mark.parametrize("verdict", [
        Verdict.MILDLY_UNFAVORABLE, Verdict.STRONGLY_UNFAVORABLE,
    ])
    def test_points_never_turn_no_into_yes(self, verdict):
        assert nudge_verdict(verdict, 100) == verdict

    @pytest.mark.parametrize("verdict", [
        Verdict.MILDLY_FAVORABLE, Verdict.STRONGLY_FAVORABLE,
    ])
    def test_points_never_turn_yes_into_no(self, verdict):
        assert nudge_verdict(verdict, -100) == verdict


class TestPersonalScoring:
    def test_high_energy_push(self):
        result = _personal(Category.LOVE, _report({Category.LOVE: 8}), PUSH)

        assert result.category == Category.LOVE
        assert result.score == 40
        assert result.verdict == Verdict.STRONGLY_FAVORABLE
        assert _points(result.factors) == [30, 10]
        assert result.factors[0].source == "Daily love score"

    def test_no_variance_is_drawn(self):
        class NeverRandom:
            def randint(self, a, b):
                raise AssertionError("variance should not be drawn")

        engine = ScoreDecisionEngine(analyzer=StubAnalyzer(Category.LOVE), rng=NeverRandom())
        result = engine.score_personal("anything", _report({Category.LOVE: 6}))
        assert result.score == 10
        assert result.verdict == Verdict.AMBIGUOUS

    def test_points_cannot_lift_a_low_reading(self):
        report = _report({Category.MONEY: 5}, key_transits=tuple(
            _transit(TransitImpact.POSITIVE, Category.MONEY) for _ in range(4)
        ))
        result = _personal(Category.MONEY, report)

        assert result.score == 19
        assert result.verdict == Verdict.MILDLY_UNFAVORABLE

    def test_ambiguous_nudged_one_step(self):
        report = _report(
            {Category.DECISIONS: 6},
            moon_phase=MoonPhase.WAXING_CRESCENT,
            key_transits=tuple(_transit(TransitImpact.POSITIVE, Category.DECISIONS) for _ in range(3)),
        )
        result = _personal(Category.DECISIONS, report, PUSH)

        assert result.score == 35
        assert result.verdict == Verdict.MILDLY_FAVORABLE

    def test_mild_yes_strengthened(self):
        result = _personal(Category.CAREER, _report({Category.CAREER: 7}), PUSH)
        assert result.score == 30
        assert result.verdict == Verdict.STRONGLY_FAVORABLE

    def test_mild_no_strengthened(self):
        report = _report({Category.HEALTH: 4}, retrogrades=frozenset({Planet.MARS}))
        result = _personal(Category.HEALTH, report, PUSH)

        assert result.score == -37
        assert result.verdict == Verdict.STRONGLY_UNFAVORABLE
        assert _points(result.factors) == [-15, -12, -10]

    def test_low_energy_day_favours_rest(self):
        result = _personal(Category.HEALTH, _report({Category.HEALTH: 2}), PULL)

        assert result.score == -15
        assert result.verdict == Verdict.STRONGLY_FAVORABLE

    def test_negated_question_flips(self):
        report = _report({Category.LOVE: 8})
        plain = _personal(Category.LOVE, report, PUSH)
        negated = _personal(Category.LOVE, report, PUSH, negative=True)

        assert negated.score == -40
        assert negated.verdict == Verdict.STRONGLY_UNFAVORABLE
        assert negated.score == -plain.score

    def test_borrowed_area(self):
        report = _report({Category.SOCIAL: 9}, retrogrades=frozenset({Planet.MERCURY}))
        result = _personal(Category.COMMUNICATION, report)

        assert result.category == Category.COMMUNICATION
        assert result.score == 28
        assert result.verdict == Verdict.STRONGLY_FAVORABLE
        assert result.factors[0].description == "social energy: 9/10"

    def test_timing_reads_decisions(self):
        result = _personal(Category.TIMING, _report({Category.DECISIONS: 3}))
        assert result.score == -20
        assert result.verdict == Verdict.STRONGLY_UNFAVORABLE

    def test_unclassifiable_short_circuits(self):
        result = _personal(Category.LOVE, _report({Category.LOVE: 9}), PUSH, confidence=0.2)

        assert result.verdict == Verdict.UNCLASSIFIABLE
        assert result.score == 0
        assert len(result.factors) == 1
        assert result.factors[0].source == "Confidence too low (20%)"

    def test_missing_reading_is_unclassifiable(self):
        result = _personal(Category.LOVE, _report({Category.CAREER: 9}), PUSH)

        assert result.verdict == Verdict.UNCLASSIFIABLE
        assert result.score == 0
        assert result.category == Category.TIMING
        assert result.factors[0].source == "Calculation error: Daily report has no love reading"

    def test_factors_sorted_by_magnitude(self):
        report = _report(
            {Category.LOVE: 7},
            moon_phase=MoonPhase.WANING_GIBBOUS,
            retrogrades=frozenset({Planet.VENUS, Planet.MARS}),
            key_transits=(_transit(TransitImpact.NEGATIVE, Category.LOVE),),
        )
        result = _personal(Category.LOVE, report, PUSH)
        magnitudes = [abs(f.points) for f in result.factors]
        assert magnitudes == sorted(magnitudes, reverse=True)
        # 20 + 10 - 10 - 8 - 12 - 12
        assert result.score == -12
        assert result.verdict == Verdict.MILDLY_FAVORABLE


def test_score_personal_decision_with_real_analyzer():
    result = score_personal_decision("Should I confess to my crush?", _report({Category.LOVE: 9}))

    assert result.category == Category.LOVE
    assert result.score == 50
    assert result.verdict == Verdict.STRONGLY_FAVORABLE
