# -*- coding: utf-8 -*-
"""Category metadata registry.

Every per-category table the classifier and the factor scorers need
(trigger keywords, relevant planets, Moon sign affinities, day-ruler
bonuses) is kept here, keyed by :class:`Category`, so that tuning a
category is a single edit. The registry is built once at import and
exposed through read-only mappings.
"""

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Pattern, Tuple

from models import Category, Planet, Sign


@dataclass(frozen=True)
class CategoryProfile:
    category: Category
    keywords: Tuple[str, ...]
    relevant_planets: FrozenSet[Planet]
    supportive_signs: FrozenSet[Sign]
    challenging_signs: FrozenSet[Sign]
    day_ruler_bonus: Mapping[Planet, int]

    def is_relevant(self, planet: Planet) -> bool:
        return planet in self.relevant_planets


# Short words that would match inside unrelated words ("ex" in "next",
# "bet" in "better", "sign" in "design"); matched on whole-word boundaries.
WHOLE_WORD_KEYWORDS: FrozenSet[str] = frozenset({
    "ex", "eth", "btc", "bet", "art", "run", "eat", "say", "ask", "sue",
    "pay", "now", "date", "text", "sign", "role", "make", "call", "cost",
    "rent", "soul", "time", "move", "rest", "pass", "ease", "less", "more",
    "home", "stop", "break", "heal", "meet", "walk", "bike", "hike", "swim",
    "raise",
})

# "work" counts toward career only as a standalone word, never as part of
# "workout", "work out" or "working out".
WORK_PATTERN: Pattern = re.compile(r"\bwork(?:s|ing)?\b(?!\s*out\b)")

_S = Sign
_P = Planet

_DAY_RULER_MATRIX: Dict[Planet, Dict[Category, int]] = {
    _P.SUN: {
        Category.LOVE: -3, Category.CAREER: 8, Category.MONEY: 5, Category.COMMUNICATION: 0,
        Category.CONFLICT: 5, Category.TIMING: 3, Category.HEALTH: 10, Category.SOCIAL: 5,
        Category.DECISIONS: 5, Category.CREATIVITY: 3, Category.SPIRITUAL: 0,
    },
    _P.MOON: {
        Category.LOVE: 6, Category.CAREER: -5, Category.MONEY: -3, Category.COMMUNICATION: 3,
        Category.CONFLICT: -8, Category.TIMING: 5, Category.HEALTH: 3, Category.SOCIAL: 5,
        Category.DECISIONS: -3, Category.CREATIVITY: 8, Category.SPIRITUAL: 8,
    },
    _P.MARS: {
        Category.LOVE: -5, Category.CAREER: 5, Category.MONEY: 0, Category.COMMUNICATION: -8,
        Category.CONFLICT: 10, Category.TIMING: 3, Category.HEALTH: 12, Category.SOCIAL: -5,
        Category.DECISIONS: 5, Category.CREATIVITY: -3, Category.SPIRITUAL: -5,
    },
    _P.MERCURY: {
        Category.LOVE: 0, Category.CAREER: 5, Category.MONEY: 5, Category.COMMUNICATION: 10,
        Category.CONFLICT: -5, Category.TIMING: 3, Category.HEALTH: 0, Category.SOCIAL: 8,
        Category.DECISIONS: 8, Category.CREATIVITY: 5, Category.SPIRITUAL: 0,
    },
    _P.JUPITER: {
        Category.LOVE: 5, Category.CAREER: 8, Category.MONEY: 10, Category.COMMUNICATION: 5,
        Category.CONFLICT: -3, Category.TIMING: 5, Category.HEALTH: 5, Category.SOCIAL: 8,
        Category.DECISIONS: 5, Category.CREATIVITY: 5, Category.SPIRITUAL: 10,
    },
    _P.VENUS: {
        Category.LOVE: 10, Category.CAREER: -3, Category.MONEY: 8, Category.COMMUNICATION: 5,
        Category.CONFLICT: -10, Category.TIMING: 0, Category.HEALTH: -5, Category.SOCIAL: 10,
        Category.DECISIONS: -3, Category.CREATIVITY: 10, Category.SPIRITUAL: 5,
    },
    _P.SATURN: {
        Category.LOVE: -10, Category.CAREER: 10, Category.MONEY: 5, Category.COMMUNICATION: -5,
        Category.CONFLICT: 8, Category.TIMING: -8, Category.HEALTH: 8, Category.SOCIAL: -5,
        Category.DECISIONS: 8, Category.CREATIVITY: -5, Category.SPIRITUAL: 5,
    },
}


def _profile(category: Category, keywords, planets, supportive=(), challenging=()) -> CategoryProfile:
    row = {ruler: bonuses[category] for ruler, bonuses in _DAY_RULER_MATRIX.items()}
    return CategoryProfile(
        category=category,
        keywords=tuple(keywords),
        relevant_planets=frozenset(planets),
        supportive_signs=frozenset(supportive),
        challenging_signs=frozenset(challenging),
        day_ruler_bonus=MappingProxyType(row),
    )


_PROFILES = [
    _profile(
        Category.LOVE,
        ["love", "relationship", "partner", "boyfriend", "girlfriend", "husband", "wife",
         "date", "dating", "romance", "romantic", "crush", "ex", "marriage", "marry",
         "confess", "feelings", "heart", "soulmate", "attraction", "attracted", "chemistry",
         "breakup", "break up", "together", "commitment", "kiss", "text", "message him",
         "message her", "think about me", "thinking about me", "miss me", "likes me",
         "does he", "does she"],
        [_P.VENUS, _P.MOON, _P.MARS, _P.JUPITER],
        supportive=[_S.TAURUS, _S.CANCER, _S.LEO, _S.LIBRA, _S.PISCES],
        challenging=[_S.AQUARIUS, _S.CAPRICORN, _S.VIRGO],
    ),
    _profile(
        Category.CAREER,
        ["job", "career", "promotion", "boss", "interview", "hire", "hired",
         "quit job", "resign", "business", "company", "professional", "office", "salary",
         "raise", "position", "role", "project", "deadline", "meeting", "presentation",
         "opportunity", "offer", "negotiate", "client", "coworker", "colleague"],
        [_P.SATURN, _P.JUPITER, _P.MARS, _P.SUN, _P.MERCURY],
        supportive=[_S.CAPRICORN, _S.VIRGO, _S.LEO, _S.ARIES, _S.SCORPIO],
        challenging=[_S.PISCES, _S.CANCER],
    ),
    _profile(
        Category.MONEY,
        ["money", "financial", "finance", "invest", "investment", "stock", "crypto",
         "buy", "purchase", "sell", "loan", "debt", "savings", "budget", "expensive",
         "afford", "rich", "wealth", "income", "spend", "spending", "bank", "mortgage",
         "rent", "price", "cost", "pay", "payment",
         "gamble", "gambling", "bet", "betting", "casino", "lottery", "bitcoin", "btc",
         "ethereum", "eth", "trade", "trading", "forex", "options", "futures"],
        [_P.JUPITER, _P.VENUS, _P.SATURN, _P.PLUTO],
        supportive=[_S.TAURUS, _S.CAPRICORN, _S.VIRGO, _S.SCORPIO],
        challenging=[_S.SAGITTARIUS, _S.ARIES, _S.PISCES],
    ),
    _profile(
        Category.COMMUNICATION,
        ["tell", "say", "talk", "speak", "conversation", "communicate", "email",
         "call", "phone", "respond", "reply", "discuss", "explain", "share",
         "announce", "reveal", "admit", "confide", "express", "voice", "letter",
         "apology", "apologize", "confront", "ask", "question", "answer"],
        [_P.MERCURY, _P.MOON, _P.JUPITER],
        supportive=[_S.GEMINI, _S.LIBRA, _S.AQUARIUS, _S.SAGITTARIUS],
        challenging=[_S.SCORPIO, _S.CANCER],
    ),
    _profile(
        Category.CONFLICT,
        ["fight", "argue", "argument", "conflict", "disagree", "disagreement",
         "angry", "anger", "upset", "confront", "confrontation", "defend",
         "attack", "sue", "legal", "lawsuit", "dispute", "problem", "issue",
         "difficult", "challenge", "enemy", "rival", "compete", "competition"],
        [_P.MARS, _P.SATURN, _P.PLUTO, _P.URANUS],
        supportive=[_S.ARIES, _S.SCORPIO, _S.CAPRICORN],
    ),
    _profile(
        Category.TIMING,
        ["when", "today", "tomorrow", "now", "soon", "wait", "time", "timing",
         "right time", "good time", "start", "begin", "launch", "initiate",
         "move", "travel", "trip", "vacation", "sign", "contract", "decision",
         "choose", "decide", "ready", "prepared"],
        [_P.MOON, _P.MERCURY, _P.SUN, _P.MARS],
        supportive=[_S.ARIES, _S.CANCER, _S.LIBRA, _S.CAPRICORN],
    ),
    _profile(
        Category.HEALTH,
        ["workout", "work out", "working out", "exercise", "gym", "run", "running", "jog", "jogging",
         "fitness", "health", "healthy", "diet", "eat", "eating", "food", "meal",
         "sleep", "rest", "meditation", "yoga", "sport", "sports", "training",
         "body", "weight", "muscle", "cardio", "stretch", "walk", "walking",
         "swim", "swimming", "bike", "cycling", "hike", "hiking"],
        [_P.MARS, _P.SUN, _P.MOON, _P.SATURN],
        supportive=[_S.ARIES, _S.LEO, _S.VIRGO, _S.CAPRICORN, _S.SCORPIO],
        challenging=[_S.PISCES, _S.LIBRA, _S.TAURUS],
    ),
    _profile(
        Category.SOCIAL,
        ["friend", "friends", "party", "gathering", "event", "social", "hangout",
         "meet", "meeting", "network", "networking", "group", "community"],
        [_P.VENUS, _P.MOON, _P.MERCURY, _P.JUPITER],
    ),
    _profile(
        Category.DECISIONS,
        ["decide", "decision", "choose", "choice", "option", "right choice",
         "best choice", "pick", "select", "which one", "torn between"],
        [_P.MERCURY, _P.SATURN, _P.JUPITER, _P.SUN],
    ),
    _profile(
        Category.CREATIVITY,
        ["creative", "create", "art", "artistic", "write", "writing", "paint", "music",
         "design", "idea", "inspiration", "project", "build", "make"],
        [_P.VENUS, _P.NEPTUNE, _P.URANUS, _P.MOON],
    ),
    _profile(
        Category.SPIRITUAL,
        ["spiritual", "spirit", "soul", "meditation", "pray", "prayer", "faith",
         "universe", "cosmic", "divine", "energy", "healing", "intuition"],
        [_P.NEPTUNE, _P.JUPITER, _P.PLUTO, _P.MOON],
    ),
]

CATEGORY_REGISTRY: Mapping[Category, CategoryProfile] = MappingProxyType(
    {profile.category: profile for profile in _PROFILES}
)


def get_profile(category: Category) -> CategoryProfile:
    """Return the metadata profile for a category"""
    return CATEGORY_REGISTRY[category]


# ---------------- Planet natures -----------------

BENEFICS: FrozenSet[Planet] = frozenset({_P.VENUS, _P.JUPITER})
# Pluto counts as malefic for conjunctions but not for the fortune point
CONJUNCTION_MALEFICS: FrozenSet[Planet] = frozenset({_P.MARS, _P.SATURN, _P.PLUTO})
FORTUNE_MALEFICS: FrozenSet[Planet] = frozenset({_P.MARS, _P.SATURN})

# Planets whose retrograde motion hampers effortful "push" questions
ACTION_PLANETS: FrozenSet[Planet] = frozenset({_P.MARS})

PUSH_DAY_RULERS: FrozenSet[Planet] = frozenset({_P.MARS, _P.SUN, _P.JUPITER})
PULL_DAY_RULERS: FrozenSet[Planet] = frozenset({_P.MOON, _P.VENUS, _P.SATURN})

# Fire and cardinal signs favour action; water and mutable signs favour ease
PUSH_MOON_SIGNS: FrozenSet[Sign] = frozenset({
    _S.ARIES, _S.LEO, _S.SAGITTARIUS, _S.CANCER, _S.LIBRA, _S.CAPRICORN,
})
PULL_MOON_SIGNS: FrozenSet[Sign] = frozenset({
    _S.PISCES, _S.CANCER, _S.SCORPIO, _S.GEMINI, _S.VIRGO, _S.SAGITTARIUS,
})

DAY_NAMES: Mapping[Planet, str] = MappingProxyType({
    _P.SUN: "Sunday",
    _P.MOON: "Monday",
    _P.MARS: "Tuesday",
    _P.MERCURY: "Wednesday",
    _P.JUPITER: "Thursday",
    _P.VENUS: "Friday",
    _P.SATURN: "Saturday",
})

# ---------------- Retrograde severity tiers -----------------

_ALL_CATEGORIES = frozenset(Category)
_MERCURY_SEVERE = frozenset({Category.COMMUNICATION, Category.TIMING, Category.CAREER})

RETROGRADE_TIERS: Mapping[Planet, Mapping[str, FrozenSet[Category]]] = MappingProxyType({
    _P.MERCURY: MappingProxyType({
        "severe": _MERCURY_SEVERE,
        "mild": _ALL_CATEGORIES - _MERCURY_SEVERE,
    }),
    _P.VENUS: MappingProxyType({
        "severe": frozenset({Category.LOVE, Category.MONEY}),
    }),
})

RETROGRADE_DESCRIPTIONS: Mapping[Planet, str] = MappingProxyType({
    _P.MERCURY: "Mercury retrograde urges caution",
    _P.VENUS: "Venus retrograde suggests reviewing, not initiating",
})

# ---------------- Intent and polarity vocabularies -----------------

NEGATION_PATTERNS: Tuple[Pattern, ...] = tuple(re.compile(p) for p in (
    r"\bshould\s*(i|we)\s*not\b",
    r"\bshouldn'?t\s*(i|we)\b",
    r"\bshould\s*(i|we)\s*(avoid|skip|stop|cancel|refuse|reject)\b",
    r"\bshould\s*(i|we)\s*(wait|delay|hold off)\b",
    r"\bis\s*it\s*(a\s*)?bad\s*(idea|time|day)\b",
    r"\bnot\s*(a\s*)?(good|right|best)\s*(time|idea|day)\b",
    r"\bdon'?t\s*(i|we)\b",
    r"\bavoid\b",
    r"\bstay\s*away\b",
))

PUSH_KEYWORDS: Tuple[str, ...] = (
    "extra", "more", "harder", "push", "start", "begin", "launch", "initiate",
    "ask out", "confess", "confront", "challenge", "apply", "pursue", "chase",
    "accelerate", "intensify", "invest", "commit", "engage", "attack", "fight",
    "overtime", "extra hours", "work late", "stay late", "hustle", "grind",
    "take on", "accept", "say yes", "go for", "dive in", "jump in",
    "buy", "purchase", "spend", "gamble", "bet", "trade", "crypto", "btc",
    "bitcoin", "stock", "put money",
)

PULL_KEYWORDS: Tuple[str, ...] = (
    "rest", "relax", "early", "leave", "quit", "stop", "pause", "break",
    "home", "go home", "take off", "slow down", "step back", "retreat",
    "decline", "refuse", "say no", "skip", "pass", "delay", "postpone",
    "wait", "hold off", "ease", "chill", "unwind", "recover", "heal",
    "less", "reduce", "cut back", "dial down", "take it easy",
)

# ---------------- Personal daily report -----------------

# Life areas scored by the daily report generator
REPORT_CATEGORIES: FrozenSet[Category] = frozenset({
    Category.LOVE, Category.CAREER, Category.MONEY, Category.HEALTH,
    Category.SOCIAL, Category.DECISIONS, Category.CREATIVITY, Category.SPIRITUAL,
})

# Question categories without an area of their own borrow a neighbouring one
REPORT_CATEGORY_MAP: Mapping[Category, Category] = MappingProxyType({
    **{category: category for category in REPORT_CATEGORIES},
    Category.COMMUNICATION: Category.SOCIAL,
    Category.CONFLICT: Category.DECISIONS,
    Category.TIMING: Category.DECISIONS,
})

# Retrogrades that weigh on a report reading; action planets hit every push question
REPORT_RETROGRADE_CATEGORIES: Mapping[Planet, FrozenSet[Category]] = MappingProxyType({
    _P.MERCURY: frozenset({Category.COMMUNICATION, Category.CAREER}),
    _P.VENUS: frozenset({Category.LOVE, Category.MONEY}),
})
