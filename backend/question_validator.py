# -*- coding: utf-8 -*-
"""Input screening for questions before they reach the scoring engine.

The engine itself accepts any text (vague questions come back as
unclassifiable). These helpers let a caller turn away gibberish early and
route distressed users to real help instead of a reading.
"""

import re
from dataclasses import dataclass
from typing import Optional

MIN_WORDS = 2
MIN_LENGTH = 8

GIBBERISH_PATTERNS = [
    re.compile(r"^[a-z]{1,3}$", re.IGNORECASE),    # "ss", "ab", "xyz"
    re.compile(r"^(.)\1+$", re.IGNORECASE),        # "aaaa"
    re.compile(r"^[^a-z]*$", re.IGNORECASE),       # no letters at all
    re.compile(r"^[a-z]+$", re.IGNORECASE),        # a single bare word
    re.compile(r"^(test|testing|asdf|qwerty|hello|hi|hey|yo|ok|okay|yes|no|maybe)$", re.IGNORECASE),
]

MEANINGFUL_WORDS = {
    'should', 'will', 'can', 'is', 'are', 'do', 'does', 'would', 'could',
    'today', 'tomorrow', 'now', 'time', 'good', 'right', 'love', 'work',
    'job', 'money', 'relationship', 'partner', 'ask', 'tell', 'start',
    'begin', 'go', 'move', 'buy', 'sell', 'invest', 'travel', 'meet',
    'date', 'marry', 'confess', 'apply', 'quit', 'change', 'try',
}

CRISIS_PATTERNS = [re.compile(p, re.IGNORECASE) for p in (
    r"\b(kill|end)\s+(my|him|her|them)self\b",
    r"\bsuicid",
    r"\bself[- ]?harm",
    r"\bwant\s+to\s+die\b",
    r"\bdon'?t\s+want\s+to\s+(live|be\s+alive|exist)\b",
    r"\bend\s+(my|it\s+all|everything)\b",
    r"\bnot\s+worth\s+living\b",
    r"\bno\s+(reason|point)\s+(to|in)\s+(live|living|go\s+on)\b",
    r"\bbetter\s+off\s+dead\b",
    r"\bcan'?t\s+(go\s+on|take\s+(it|this)\s+anymore)\b",
    r"\bhurt\s+myself\b",
    r"\bcutting\s+myself\b",
)]

CRISIS_RESPONSE = """You are not alone. What you are feeling matters, and this app is not the right place for this.

Please reach out to someone who can help:

US: Call or text 988 (24/7)
UK: Call 116 123 (Samaritans, 24/7)
Canada: Call or text 988 (24/7)
Australia: Call 13 11 14 (Lifeline, 24/7)
EU: Call 116 123
International: findahelpline.com

You deserve support from a real person, not a reading from the stars."""

EXAMPLE_QUESTIONS = [
    "Should I confess my feelings today?",
    "Will my meeting go well today?",
    "Is today favorable for important decisions?",
    "Should I ask for a raise this week?",
    "Is this a good time to invest?",
]


@dataclass
class ValidationResult:
    is_valid: bool
    error: Optional[str] = None
    suggestion: Optional[str] = None


def detect_crisis(text: str) -> bool:
    """True when the input suggests the person may be in distress"""
    cleaned = (text or "").lower().strip()
    return any(pattern.search(cleaned) for pattern in CRISIS_PATTERNS)


def is_gibberish(text: str) -> bool:
    cleaned = text.strip().lower()

    if any(pattern.search(cleaned) for pattern in GIBBERISH_PATTERNS):
        words = [re.sub(r"[?.,!]", "", word) for word in cleaned.split()]
        if not any(word in MEANINGFUL_WORDS for word in words):
            return True

    consonants = len(re.sub(r"[^bcdfghjklmnpqrstvwxyz]", "", cleaned))
    vowels = len(re.sub(r"[^aeiou]", "", cleaned))

    # Keyboard mashing like "sdfgh"
    if vowels > 0 and consonants / vowels > 4:
        return True
    if vowels == 0 and len(cleaned) > 3:
        return True

    return False


def count_words(text: str) -> int:
    return len(text.split())


def validate_question(question: str) -> ValidationResult:
    """Check that a question is long and real enough to be worth a reading"""
    trimmed = (question or "").strip()

    if len(trimmed) < MIN_LENGTH:
        return ValidationResult(
            is_valid=False,
            error="Question too short",
            suggestion='Ask a complete question like "Should I ask for a raise today?"',
        )

    if is_gibberish(trimmed):
        return ValidationResult(
            is_valid=False,
            error="Please ask a real question",
            suggestion='Try asking something like "Is today a good day for important decisions?"',
        )

    if count_words(trimmed) < MIN_WORDS:
        return ValidationResult(
            is_valid=False,
            error="Question needs more context",
            suggestion='Add more details like "Should I apply for this job?"',
        )

    return ValidationResult(is_valid=True)
