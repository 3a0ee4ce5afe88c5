# -*- coding: utf-8 -*-
"""HTTP API for the oracle scoring engine."""

import random
import logging

from flask import Flask, jsonify, request

from judgment_engine import ScoreDecisionEngine, get_engine_info, profile_calculation
from planetary_time import PlanetaryTimeManager
from question_analysis import OracleQuestionAnalyzer
from question_validator import validate_question, detect_crisis, CRISIS_RESPONSE
from serialization import (
    ContextFormatError, context_from_dict, report_from_dict, result_to_dict, analysis_to_dict,
)

logger = logging.getLogger(__name__)

app = Flask(__name__)

analyzer = OracleQuestionAnalyzer()
time_manager = PlanetaryTimeManager()


def _error(message: str, status: int = 400):
    return jsonify({"error": message}), status


@app.route('/api/score', methods=['POST'])
def score():
    """Score a question against a precomputed astrological context"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return _error("Request body must be a JSON object")

    question = data.get("question")
    if not isinstance(question, str):
        return _error("'question' must be a string")

    if detect_crisis(question):
        logger.info("Crisis language detected - returning support resources")
        return jsonify({"crisis": True, "message": CRISIS_RESPONSE})

    seed = data.get("seed")
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, (int, str))):
        return _error("'seed' must be an integer or string")
    rng = random.Random(seed) if seed is not None else None
    engine = ScoreDecisionEngine(analyzer=analyzer, rng=rng)

    report_data = data.get("report")
    if report_data is not None:
        try:
            report = report_from_dict(report_data)
        except ContextFormatError as e:
            return _error(f"Invalid report: {e}")
        return jsonify(_scoring_payload(engine, question, report=report))

    context_data = data.get("context")
    if context_data is None:
        return _error("'context' or 'report' is required")

    try:
        context_payload = dict(context_data)
        timing = None
        # Derive the day ruler from the querent's local date when not supplied
        if data.get("date"):
            dt_local, _, tz_used = time_manager.parse_datetime_with_timezone(
                data["date"], data.get("time", "12:00"), data.get("timezone"))
            timing = {
                "timezone": tz_used,
                "local_time": dt_local.isoformat(),
                "day_ruler": time_manager.day_ruler(dt_local).value,
                "hour_ruler": time_manager.hour_ruler(dt_local).value,
            }
            context_payload.setdefault("day_ruler", timing["day_ruler"])
        context = context_from_dict(context_payload)
    except ContextFormatError as e:
        return _error(f"Invalid context: {e}")
    except (TypeError, ValueError) as e:
        return _error(f"Invalid request: {e}")

    result = _scoring_payload(engine, question, context=context)
    if timing:
        result["timing"] = timing
    return jsonify(result)


@profile_calculation
def _scoring_payload(engine: ScoreDecisionEngine, question: str, context=None, report=None) -> dict:
    if report is not None:
        result = result_to_dict(engine.score_personal(question, report))
    else:
        result = result_to_dict(engine.score(question, context))
    result["analysis"] = analysis_to_dict(engine.analyze(question))
    return result


@app.route('/api/validate-question', methods=['POST'])
def validate():
    data = request.get_json(silent=True) or {}
    question = data.get("question") or ""

    if detect_crisis(question):
        return jsonify({"is_valid": False, "crisis": True, "message": CRISIS_RESPONSE})

    result = validate_question(question)
    return jsonify({
        "is_valid": result.is_valid,
        "error": result.error,
        "suggestion": result.suggestion,
    })


@app.route('/api/analyze-question', methods=['POST'])
def analyze():
    data = request.get_json(silent=True) or {}
    question = data.get("question")
    if not isinstance(question, str):
        return _error("'question' must be a string")
    return jsonify(analyzer.describe(question))


@app.route('/api/engine-info', methods=['GET'])
def engine_info():
    return jsonify(get_engine_info())


if __name__ == '__main__':
    app.run(debug=False)
