# -*- coding: utf-8 -*-
"""Public entry point for the oracle scoring engine."""

from models import (
    Planet, Sign, AspectType, MoonPhase, DignityType, PatternType,
    Category, Polarity, Verdict,
    TransitAspect, Placement, SensitivePoint, LunarNodes, PlanetaryDignity,
    PatternInfo, AstroContext, Classification, QuestionAnalysis,
    ScoringFactor, ScoringResult,
    TransitImpact, CategoryReading, KeyTransit, DailyReport,
)
from question_analysis import (
    OracleQuestionAnalyzer, classify_question, has_negative_intent, detect_polarity,
)
from factor_scorers import FACTOR_SCORERS, run_scorers
from report_scorers import REPORT_SCORERS, run_report_scorers
from judgment_engine import (
    ScoreDecisionEngine,
    score_decision,
    score_personal_decision,
    reading_to_verdict,
    nudge_verdict,
    score_to_verdict,
    flip_verdict,
    clamp_score,
    load_test_config,
    validate_configuration,
    get_configuration_info,
    ScoringCalculationError,
    ScoringConfigurationError,
    setup_oracle_logging,
    profile_calculation,
    get_engine_info,
)
from oracle_config import OracleConfig, OracleError, cfg, get_config
from serialization import ContextFormatError, context_from_dict, report_from_dict, result_to_dict
from question_validator import validate_question, detect_crisis
from planetary_time import day_ruler_for
