# -*- coding: utf-8 -*-
"""Judgment engine: aggregates factor scores into a verdict."""

import os
import random
import logging
import traceback
from typing import Dict, List, Optional, Any

from oracle_config import get_config, cfg, OracleError
from question_analysis import OracleQuestionAnalyzer
from category_registry import REPORT_CATEGORY_MAP
from factor_scorers import run_scorers
from report_scorers import run_report_scorers, score_category_reading
from models import (
    AstroContext, Category, DailyReport, Polarity, QuestionAnalysis, ScoringFactor,
    ScoringResult, Verdict,
)

logger = logging.getLogger(__name__)


class ScoringCalculationError(Exception):
    """Exception raised for calculation errors in the scoring engine"""
    pass


class ScoringConfigurationError(Exception):
    """Exception raised for configuration errors in the scoring engine"""
    pass


_VERDICT_FLIPS: Dict[Verdict, Verdict] = {
    Verdict.STRONGLY_FAVORABLE: Verdict.STRONGLY_UNFAVORABLE,
    Verdict.MILDLY_FAVORABLE: Verdict.MILDLY_UNFAVORABLE,
    Verdict.AMBIGUOUS: Verdict.AMBIGUOUS,
    Verdict.MILDLY_UNFAVORABLE: Verdict.MILDLY_FAVORABLE,
    Verdict.STRONGLY_UNFAVORABLE: Verdict.STRONGLY_FAVORABLE,
    Verdict.UNCLASSIFIABLE: Verdict.UNCLASSIFIABLE,
}


def flip_verdict(verdict: Verdict) -> Verdict:
    """Return the opposite verdict; applying it twice is a no-op"""
    return _VERDICT_FLIPS[verdict]


def clamp_score(score: int) -> int:
    config = cfg()
    return max(config.score.min, min(config.score.max, score))


def score_to_verdict(score: int) -> Verdict:
    """Map a clamped score to its verdict band.

    Each threshold is the inclusive lower bound of its band, so the bands
    cover the whole score range without gaps or overlaps.
    """
    thresholds = cfg().verdict_thresholds
    if score >= thresholds.strongly_favorable:
        return Verdict.STRONGLY_FAVORABLE
    if score >= thresholds.mildly_favorable:
        return Verdict.MILDLY_FAVORABLE
    if score >= thresholds.ambiguous:
        return Verdict.AMBIGUOUS
    if score >= thresholds.mildly_unfavorable:
        return Verdict.MILDLY_UNFAVORABLE
    return Verdict.STRONGLY_UNFAVORABLE


def sort_factors(factors: List[ScoringFactor]) -> List[ScoringFactor]:
    """Order factors by descending magnitude for display"""
    return sorted(factors, key=lambda f: abs(f.points), reverse=True)


def reading_to_verdict(reading_score: int, polarity: Polarity) -> Verdict:
    """Map a 1-10 daily reading to a verdict.

    A high-energy day is a poor day to rest, so pull questions read the
    scale upside down.
    """
    if polarity == Polarity.PULL:
        reading_score = 11 - reading_score

    bands = cfg().personal.verdict_bands
    if reading_score >= bands.strongly_favorable:
        return Verdict.STRONGLY_FAVORABLE
    if reading_score >= bands.mildly_favorable:
        return Verdict.MILDLY_FAVORABLE
    if reading_score >= bands.ambiguous:
        return Verdict.AMBIGUOUS
    if reading_score >= bands.mildly_unfavorable:
        return Verdict.MILDLY_UNFAVORABLE
    return Verdict.STRONGLY_UNFAVORABLE


def nudge_verdict(verdict: Verdict, score: int) -> Verdict:
    """Let the point total firm up a verdict, never carry it across yes/no"""
    nudge = cfg().personal.nudge
    if verdict == Verdict.AMBIGUOUS:
        if score >= nudge.ambiguous:
            return Verdict.MILDLY_FAVORABLE
        if score <= -nudge.ambiguous:
            return Verdict.MILDLY_UNFAVORABLE
    elif verdict == Verdict.MILDLY_UNFAVORABLE and score <= -nudge.strengthen:
        return Verdict.STRONGLY_UNFAVORABLE
    elif verdict == Verdict.MILDLY_FAVORABLE and score >= nudge.strengthen:
        return Verdict.STRONGLY_FAVORABLE
    return verdict


class ScoreDecisionEngine:
    """Turn a question and an astrological context into a ScoringResult.

    ``rng`` only needs a ``randint(a, b)`` method. Production code leaves it
    unset and gets an OS-seeded ``random.Random``; tests pass a seeded
    generator to pin the cosmic variance term.
    """

    def __init__(self, analyzer: Optional[OracleQuestionAnalyzer] = None,
                 rng: Optional[Any] = None):
        self.analyzer = analyzer or OracleQuestionAnalyzer()
        self.rng = rng if rng is not None else random.Random()

    def score(self, question: str, context: AstroContext) -> ScoringResult:
        """Score a question against an astrological context; never raises"""
        try:
            return self._score(question, context)
        except (ScoringCalculationError, ScoringConfigurationError) as e:
            logger.warning(f"Scoring failed: {e}")
            return self._error_result(e)
        except Exception as e:
            logger.error(f"Error in score: {e}")
            logger.error(traceback.format_exc())
            return self._error_result(e)

    def score_personal(self, question: str, report: DailyReport) -> ScoringResult:
        """Score a question against a personal daily report; never raises"""
        try:
            return self._score_personal(question, report)
        except (ScoringCalculationError, ScoringConfigurationError) as e:
            logger.warning(f"Personal scoring failed: {e}")
            return self._error_result(e)
        except Exception as e:
            logger.error(f"Error in score_personal: {e}")
            logger.error(traceback.format_exc())
            return self._error_result(e)

    def _error_result(self, error: Exception) -> ScoringResult:
        return ScoringResult(
            verdict=Verdict.UNCLASSIFIABLE,
            score=0,
            factors=[ScoringFactor(
                description="The reading could not be completed",
                points=0,
                source=f"Calculation error: {error}",
            )],
            category=self._fallback_category(),
        )

    def _fallback_category(self) -> Category:
        try:
            return Category(cfg().classification.default_category)
        except (OracleError, ValueError, AttributeError):
            return Category.TIMING

    def _config(self):
        try:
            return cfg()
        except OracleError as e:
            raise ScoringConfigurationError(f"Configuration unavailable: {e}") from e

    def _analyze(self, question: str) -> QuestionAnalysis:
        analysis = self.analyzer.analyze_question(question)
        logger.debug(
            f"Question analysis: category={analysis.category.value} "
            f"confidence={analysis.confidence} polarity={analysis.polarity.value} "
            f"negative={analysis.negative_intent}"
        )
        return analysis

    def _too_vague(self, analysis: QuestionAnalysis, config) -> Optional[ScoringResult]:
        """Short-circuit result for questions below the confidence floor"""
        if analysis.confidence >= config.confidence.unclassifiable_below:
            return None

        percent = round(analysis.confidence * 100)
        logger.info(f"Question unclassifiable (confidence {percent}%)")
        return ScoringResult(
            verdict=Verdict.UNCLASSIFIABLE,
            score=0,
            factors=[ScoringFactor(
                description="This question is too vague for the cosmos to care about",
                points=0,
                source=f"Confidence too low ({percent}%)",
            )],
            category=analysis.category,
        )

    def _score(self, question: str, context: AstroContext) -> ScoringResult:
        config = self._config()
        analysis = self._analyze(question)
        percent = round(analysis.confidence * 100)

        # Too vague to read: no scorer gets a say
        vague = self._too_vague(analysis, config)
        if vague is not None:
            return vague

        factors: List[ScoringFactor] = []

        if analysis.confidence < config.confidence.weak_signal_below:
            factors.append(ScoringFactor(
                description="The cosmic signal is weak on this one",
                points=config.confidence.weak_signal_penalty,
                source=f"Low category confidence ({percent}%)",
            ))

        factors.extend(run_scorers(analysis.category, analysis.polarity, context, analysis.confidence))

        variance = self.rng.randint(config.variance.min, config.variance.max)
        factors.append(ScoringFactor(
            description="Cosmic variance - the universe keeps some secrets",
            points=variance,
            source="Mystery of the cosmos",
        ))

        total = sum(factor.points for factor in factors)
        clamped = clamp_score(total)
        verdict = score_to_verdict(clamped)

        # "Should I NOT ask for a raise?" under good skies is a no
        if analysis.negative_intent:
            verdict = flip_verdict(verdict)
            clamped = -clamped

        logger.debug(f"Raw total {total}, reported score {clamped}, verdict {verdict.code}")

        return ScoringResult(
            verdict=verdict,
            score=clamped,
            factors=sort_factors(factors),
            category=analysis.category,
        )

    def _score_personal(self, question: str, report: DailyReport) -> ScoringResult:
        config = self._config()
        analysis = self._analyze(question)

        vague = self._too_vague(analysis, config)
        if vague is not None:
            return vague

        area = REPORT_CATEGORY_MAP[analysis.category]
        reading = report.categories.get(area)
        if reading is None:
            raise ScoringCalculationError(f"Daily report has no {area.value} reading")

        factors = [score_category_reading(area, reading)]
        factors.extend(run_report_scorers(analysis.category, analysis.polarity, reading, report))

        total = sum(factor.points for factor in factors)
        clamped = clamp_score(total)

        # The day's reading decides the side; the points may only firm it up
        verdict = nudge_verdict(reading_to_verdict(reading.score, analysis.polarity), clamped)

        if analysis.negative_intent:
            verdict = flip_verdict(verdict)
            clamped = -clamped

        logger.debug(
            f"Reading {area.value}={reading.score}, total {total}, "
            f"reported score {clamped}, verdict {verdict.code}"
        )

        return ScoringResult(
            verdict=verdict,
            score=clamped,
            factors=sort_factors(factors),
            category=analysis.category,
        )

    def analyze(self, question: str) -> QuestionAnalysis:
        return self.analyzer.analyze_question(question)


def score_decision(question: str, context: AstroContext, rng: Optional[Any] = None) -> ScoringResult:
    """Score with a throwaway engine"""
    return ScoreDecisionEngine(rng=rng).score(question, context)


def score_personal_decision(question: str, report: DailyReport) -> ScoringResult:
    """Score against a personal daily report with a throwaway engine"""
    return ScoreDecisionEngine().score_personal(question, report)


def load_test_config(config_path: str) -> None:
    """Point the engine at another constant table (for tests)"""
    from oracle_config import OracleConfig

    os.environ['ORACLE_CONFIG'] = config_path
    OracleConfig.reset()


def validate_configuration() -> Dict[str, Any]:
    """Validate current configuration and return status"""
    try:
        config = get_config()
        config.validate_required_keys()

        return {
            "valid": True,
            "config_file": os.environ.get('ORACLE_CONFIG', 'oracle_constants.yaml'),
            "message": "Configuration is valid"
        }
    except OracleError as e:
        return {
            "valid": False,
            "error": str(e),
            "message": "Configuration validation failed"
        }
    except Exception as e:
        return {
            "valid": False,
            "error": str(e),
            "message": "Unexpected error during configuration validation"
        }


def get_configuration_info() -> Dict[str, Any]:
    """Get information about current configuration"""
    try:
        config = get_config()

        return {
            "config_file": os.environ.get('ORACLE_CONFIG', 'oracle_constants.yaml'),
            "version": config.get('version'),
            "confidence": {
                "unclassifiable_below": config.get('confidence.unclassifiable_below'),
                "weak_signal_below": config.get('confidence.weak_signal_below'),
            },
            "variance": {
                "min": config.get('variance.min'),
                "max": config.get('variance.max'),
            },
            "verdict_thresholds": config.get('verdict_thresholds'),
            "transits": {
                "max_considered": config.get('transits.max_considered'),
                "max_orb": config.get('transits.max_orb'),
            },
        }
    except Exception as e:
        return {
            "error": str(e),
            "message": "Failed to get configuration info"
        }


def setup_oracle_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Setup logging for the oracle engine"""
    # Configure the package-level loggers used by every engine module
    for name in (__name__, "question_analysis", "factor_scorers", "oracle_config"):
        module_logger = logging.getLogger(name)
        module_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
        module_logger.handlers.clear()

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        module_logger.addHandler(console_handler)

        if log_file:
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(formatter)
            module_logger.addHandler(file_handler)

    logger.info(f"Oracle engine logging configured at {level} level")


def profile_calculation(func):
    """Decorator to profile calculation performance"""
    import time
    import functools

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.time()
        try:
            result = func(*args, **kwargs)
            execution_time = time.time() - start_time

            logger.info(f"{func.__name__} executed in {execution_time:.4f} seconds")

            if isinstance(result, dict):
                result['_performance'] = {
                    'function': func.__name__,
                    'execution_time_seconds': execution_time
                }

            return result
        except Exception as e:
            execution_time = time.time() - start_time
            logger.error(f"{func.__name__} failed after {execution_time:.4f} seconds: {e}")
            raise

    return wrapper


__version__ = "1.2.0"
__compatibility__ = {
    "api_version": "1.0",
    "config_version": "1.2",
    "breaking_changes": [],
    "deprecated": []
}


def get_engine_info() -> Dict[str, Any]:
    """Get information about the scoring engine"""
    return {
        "version": __version__,
        "compatibility": __compatibility__,
        "configuration_status": validate_configuration(),
        "features": {
            "keyword_classification": True,
            "negated_intent_inversion": True,
            "action_polarity": True,
            "injectable_variance": True,
            "lunar_nodes": True,
            "part_of_fortune": True,
            "natal_dignities": True,
            "natal_patterns": True,
            "personal_report_scoring": True,
        }
    }


if os.environ.get('ORACLE_DISABLE_AUTO_LOGGING') != 'true':
    try:
        setup_oracle_logging()
    except Exception as e:
        print(f"Warning: Failed to setup logging: {e}")


if os.environ.get('ORACLE_CONFIG_SKIP_VALIDATION') != 'true':
    validation_result = validate_configuration()
    if not validation_result["valid"]:
        logger.warning(f"Configuration validation warning: {validation_result['error']}")
