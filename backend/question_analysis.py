# -*- coding: utf-8 -*-
"""Question analysis utilities for the oracle scoring engine."""

import re
from typing import Dict, Any, Iterable, Pattern

from oracle_config import cfg
from category_registry import (
    CATEGORY_REGISTRY,
    WHOLE_WORD_KEYWORDS,
    WORK_PATTERN,
    NEGATION_PATTERNS,
    PUSH_KEYWORDS,
    PULL_KEYWORDS,
)
from models import Category, Classification, Polarity, QuestionAnalysis


class OracleQuestionAnalyzer:
    """Classify questions and read their intent using keyword matching"""

    def __init__(self):
        # Category keyword tables, in registry order
        self.category_keywords = {
            category: profile.keywords for category, profile in CATEGORY_REGISTRY.items()
        }

        self.negation_patterns = NEGATION_PATTERNS
        self.push_keywords = PUSH_KEYWORDS
        self.pull_keywords = PULL_KEYWORDS

        # Whole-word patterns for ambiguity-prone short words
        self._word_patterns: Dict[str, Pattern] = {
            word: re.compile(r"\b" + re.escape(word) + r"\b") for word in WHOLE_WORD_KEYWORDS
        }

    def _matches(self, text: str, keyword: str) -> bool:
        pattern = self._word_patterns.get(keyword)
        if pattern is not None:
            return pattern.search(text) is not None
        return keyword in text

    def _count_hits(self, text: str, keywords: Iterable[str]) -> int:
        return sum(1 for keyword in keywords if self._matches(text, keyword))

    def analyze_question(self, question: str) -> QuestionAnalysis:
        """Run classification, negation and polarity detection together"""
        classification = self.classify(question)
        return QuestionAnalysis(
            question=question,
            category=classification.category,
            confidence=classification.confidence,
            polarity=self.detect_polarity(question),
            negative_intent=self.has_negative_intent(question),
        )

    def category_scores(self, question: str) -> Dict[Category, int]:
        """Keyword hit count per category"""
        question_lower = (question or "").lower()
        scores = {
            category: self._count_hits(question_lower, keywords)
            for category, keywords in self.category_keywords.items()
        }
        if WORK_PATTERN.search(question_lower):
            scores[Category.CAREER] += 1
        return scores

    def classify(self, question: str) -> Classification:
        """Pick the category with the strictly highest keyword total.

        Ties and questions with no hits fall back to the configured default
        category. Confidence is banded rather than continuous: a single hit
        is as good as many, and question length is ignored.
        """
        config = cfg()
        scores = self.category_scores(question)
        default = Category(config.classification.default_category)

        total = sum(scores.values())
        if total == 0:
            return Classification(default, config.classification.low_confidence)

        best = max(scores.values())
        leaders = [category for category, score in scores.items() if score == best]
        category = leaders[0] if len(leaders) == 1 else default

        return Classification(category, config.classification.high_confidence)

    def has_negative_intent(self, question: str) -> bool:
        """True when the question asks about NOT doing something"""
        question_lower = (question or "").lower()
        return any(pattern.search(question_lower) for pattern in self.negation_patterns)

    def detect_polarity(self, question: str) -> Polarity:
        """Majority vote between action-intensifying and action-reducing keywords"""
        question_lower = (question or "").lower()
        push_score = self._count_hits(question_lower, self.push_keywords)
        pull_score = self._count_hits(question_lower, self.pull_keywords)

        if push_score > pull_score:
            return Polarity.PUSH
        if pull_score > push_score:
            return Polarity.PULL
        return Polarity.NEUTRAL

    def describe(self, question: str) -> Dict[str, Any]:
        """Plain-dict view of the analysis, including the per-category hit counts"""
        analysis = self.analyze_question(question)
        return {
            "category": analysis.category.value,
            "confidence": analysis.confidence,
            "polarity": analysis.polarity.value,
            "negative_intent": analysis.negative_intent,
            "category_scores": {
                category.value: score
                for category, score in self.category_scores(question).items()
                if score
            },
        }


_default_analyzer = OracleQuestionAnalyzer()


def classify_question(question: str) -> Classification:
    return _default_analyzer.classify(question)


def has_negative_intent(question: str) -> bool:
    return _default_analyzer.has_negative_intent(question)


def detect_polarity(question: str) -> Polarity:
    return _default_analyzer.detect_polarity(question)
