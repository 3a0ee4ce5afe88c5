# -*- coding: utf-8 -*-
"""Data models shared by the oracle scoring engine."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Mapping, Optional, Tuple, FrozenSet


class Planet(Enum):
    SUN = "Sun"
    MOON = "Moon"
    MERCURY = "Mercury"
    VENUS = "Venus"
    MARS = "Mars"
    JUPITER = "Jupiter"
    SATURN = "Saturn"
    URANUS = "Uranus"
    NEPTUNE = "Neptune"
    PLUTO = "Pluto"

    @classmethod
    def from_name(cls, name: str) -> "Planet":
        """Look up a planet by display name, ignoring case"""
        for planet in cls:
            if planet.value.lower() == str(name).strip().lower():
                return planet
        raise ValueError(f"Unknown planet: {name!r}")


class Sign(Enum):
    ARIES = (0, "Aries")
    TAURUS = (30, "Taurus")
    GEMINI = (60, "Gemini")
    CANCER = (90, "Cancer")
    LEO = (120, "Leo")
    VIRGO = (150, "Virgo")
    LIBRA = (180, "Libra")
    SCORPIO = (210, "Scorpio")
    SAGITTARIUS = (240, "Sagittarius")
    CAPRICORN = (270, "Capricorn")
    AQUARIUS = (300, "Aquarius")
    PISCES = (330, "Pisces")

    def __init__(self, start_degree, sign_name):
        self.start_degree = start_degree
        self.sign_name = sign_name

    @classmethod
    def from_name(cls, name: str) -> "Sign":
        for sign in cls:
            if sign.sign_name.lower() == str(name).strip().lower():
                return sign
        raise ValueError(f"Unknown sign: {name!r}")


class AspectType(Enum):
    CONJUNCTION = ("conjunction", "neutral")
    SEXTILE = ("sextile", "positive")
    SQUARE = ("square", "negative")
    TRINE = ("trine", "positive")
    OPPOSITION = ("opposition", "negative")
    QUINCUNX = ("quincunx", "negative")
    SEMI_SEXTILE = ("semi-sextile", "neutral")

    def __init__(self, config_key, quality):
        self.config_key = config_key
        self.quality = quality

    @property
    def display_name(self) -> str:
        return self.config_key

    @property
    def verb(self) -> str:
        """Verb used when describing the aspect's effect"""
        if self.quality == "positive":
            return "supports"
        if self.quality == "negative":
            return "challenges"
        return "activates"

    @classmethod
    def from_name(cls, name: str) -> "AspectType":
        key = str(name).strip().lower().replace("_", "-")
        for aspect in cls:
            if aspect.config_key == key:
                return aspect
        raise ValueError(f"Unknown aspect type: {name!r}")


class MoonPhase(Enum):
    NEW_MOON = ("New Moon", "new_moon", True)
    WAXING_CRESCENT = ("Waxing Crescent", "waxing_crescent", True)
    FIRST_QUARTER = ("First Quarter", "first_quarter", True)
    WAXING_GIBBOUS = ("Waxing Gibbous", "waxing_gibbous", True)
    FULL_MOON = ("Full Moon", "full_moon", False)
    WANING_GIBBOUS = ("Waning Gibbous", "waning_gibbous", False)
    LAST_QUARTER = ("Last Quarter", "last_quarter", False)
    WANING_CRESCENT = ("Waning Crescent", "waning_crescent", False)

    def __init__(self, phase_name, config_key, waxing):
        self.phase_name = phase_name
        self.config_key = config_key
        self.waxing = waxing

    @property
    def waning(self) -> bool:
        return not self.waxing

    @classmethod
    def from_name(cls, name: str) -> "MoonPhase":
        key = str(name).strip().lower()
        for phase in cls:
            if key in (phase.phase_name.lower(), phase.config_key):
                return phase
        raise ValueError(f"Unknown moon phase: {name!r}")


class DignityType(Enum):
    RULERSHIP = "rulership"
    EXALTATION = "exaltation"
    DETRIMENT = "detriment"
    FALL = "fall"
    NEUTRAL = "neutral"


class PatternType(Enum):
    GRAND_TRINE = ("Grand Trine", "grand_trine")
    T_SQUARE = ("T-Square", "t_square")
    STELLIUM = ("Stellium", "stellium")
    YOD = ("Yod", "yod")
    GRAND_CROSS = ("Grand Cross", "grand_cross")

    def __init__(self, pattern_name, config_key):
        self.pattern_name = pattern_name
        self.config_key = config_key

    @classmethod
    def from_name(cls, name: str) -> "PatternType":
        key = str(name).strip().lower()
        for pattern in cls:
            if key in (pattern.pattern_name.lower(), pattern.config_key):
                return pattern
        raise ValueError(f"Unknown pattern: {name!r}")


class Category(Enum):
    LOVE = "love"
    CAREER = "career"
    MONEY = "money"
    COMMUNICATION = "communication"
    CONFLICT = "conflict"
    TIMING = "timing"
    HEALTH = "health"
    SOCIAL = "social"
    DECISIONS = "decisions"
    CREATIVITY = "creativity"
    SPIRITUAL = "spiritual"


class Polarity(Enum):
    PUSH = "push"
    PULL = "pull"
    NEUTRAL = "neutral"


class Verdict(Enum):
    STRONGLY_FAVORABLE = ("strongly_favorable", "Yes")
    MILDLY_FAVORABLE = ("mildly_favorable", "Leaning yes")
    AMBIGUOUS = ("ambiguous", "Uncertain")
    MILDLY_UNFAVORABLE = ("mildly_unfavorable", "Leaning no")
    STRONGLY_UNFAVORABLE = ("strongly_unfavorable", "No")
    UNCLASSIFIABLE = ("unclassifiable", "Ask a clearer question")

    def __init__(self, code, label):
        self.code = code
        self.label = label


@dataclass(frozen=True)
class TransitAspect:
    """A transiting planet's aspect to a natal planet"""
    transit_planet: Planet
    natal_planet: Planet
    aspect: AspectType
    orb: float
    applying: bool = False


@dataclass(frozen=True)
class Placement:
    """A planet's zodiacal position"""
    planet: Planet
    sign: Sign
    degree: float
    minute: float = 0.0

    @property
    def longitude(self) -> float:
        return self.sign.start_degree + self.degree + self.minute / 60.0


@dataclass(frozen=True)
class SensitivePoint:
    """A derived chart point such as a lunar node or the Part of Fortune"""
    sign: Sign
    degree: float
    minute: float = 0.0

    @property
    def longitude(self) -> float:
        return self.sign.start_degree + self.degree + self.minute / 60.0


@dataclass(frozen=True)
class LunarNodes:
    north_node: SensitivePoint
    south_node: Optional[SensitivePoint] = None

    @property
    def north_longitude(self) -> float:
        return self.north_node.longitude % 360

    @property
    def south_longitude(self) -> float:
        if self.south_node is not None:
            return self.south_node.longitude % 360
        return (self.north_node.longitude + 180.0) % 360


@dataclass(frozen=True)
class PlanetaryDignity:
    planet: Planet
    dignity: DignityType
    strength: int  # -2 .. +2


@dataclass(frozen=True)
class PatternInfo:
    pattern: PatternType
    planets: Tuple[Planet, ...]
    description: str = ""


@dataclass(frozen=True)
class AstroContext:
    """Read-only astrological snapshot produced by the ephemeris collaborator"""
    transits: Tuple[TransitAspect, ...] = ()
    retrogrades: FrozenSet[Planet] = frozenset()
    moon_phase: Optional[MoonPhase] = None
    placements: Tuple[Placement, ...] = ()
    day_ruler: Optional[Planet] = None
    dignities: Tuple[PlanetaryDignity, ...] = ()
    patterns: Tuple[PatternInfo, ...] = ()
    lunar_nodes: Optional[LunarNodes] = None
    part_of_fortune: Optional[SensitivePoint] = None

    @property
    def moon_placement(self) -> Optional[Placement]:
        for placement in self.placements:
            if placement.planet == Planet.MOON:
                return placement
        return None

    @property
    def moon_sign(self) -> Optional[Sign]:
        moon = self.moon_placement
        return moon.sign if moon else None


class TransitImpact(Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class CategoryReading:
    """One life area of a personal daily report, scored 1-10"""
    score: int
    advice: str = ""
    good_for: Tuple[str, ...] = ()
    bad_for: Tuple[str, ...] = ()


@dataclass(frozen=True)
class KeyTransit:
    interpretation: str
    affected_categories: FrozenSet[Category]
    impact: TransitImpact = TransitImpact.NEUTRAL


@dataclass(frozen=True)
class DailyReport:
    """Read-only personal daily report produced by the report generator.

    ``categories`` covers the report's own life areas (love, career, money,
    health, social, decisions, creativity, spiritual); question categories
    without an area of their own borrow a neighbouring one.
    """
    categories: Mapping[Category, CategoryReading]
    key_transits: Tuple[KeyTransit, ...] = ()
    moon_phase: Optional[MoonPhase] = None
    retrogrades: FrozenSet[Planet] = frozenset()
    overall_score: Optional[int] = None
    headline: str = ""


@dataclass(frozen=True)
class Classification:
    category: Category
    confidence: float


@dataclass(frozen=True)
class QuestionAnalysis:
    question: str
    category: Category
    confidence: float
    polarity: Polarity
    negative_intent: bool


@dataclass
class ScoringFactor:
    """A single attributable contribution to the final score"""
    description: str
    points: int
    source: str


@dataclass
class ScoringResult:
    verdict: Verdict
    score: int
    factors: List[ScoringFactor] = field(default_factory=list)
    category: Category = Category.TIMING
