import os
import sys

import pytest

os.environ.setdefault('ORACLE_DISABLE_AUTO_LOGGING', 'true')

# Add backend directory to path for importing the engine modules
BACKEND_PATH = os.path.join(os.path.dirname(__file__), '..', 'backend')
sys.path.append(os.path.abspath(BACKEND_PATH))

from oracle_config import OracleConfig  # noqa: E402
from models import (  # noqa: E402
    AspectType, AstroContext, MoonPhase, Placement, Planet, Sign, TransitAspect,
)


class FixedRandom:
    """Random source whose variance draw is always the same value"""

    def __init__(self, value=0):
        self.value = value
        self.calls = 0

    def randint(self, a, b):
        self.calls += 1
        return self.value


@pytest.fixture(autouse=True)
def fresh_config():
    """Each test sees the configuration selected by its own environment"""
    OracleConfig.reset()
    yield
    OracleConfig.reset()


@pytest.fixture
def fixed_rng():
    return FixedRandom(0)


@pytest.fixture
def favorable_context():
    """Scores +35 for a timing question with neutral polarity and no variance"""
    return AstroContext(
        transits=(
            TransitAspect(Planet.JUPITER, Planet.SUN, AspectType.TRINE, orb=0.0, applying=True),
        ),
        moon_phase=MoonPhase.WAXING_CRESCENT,
        placements=(Placement(Planet.MOON, Sign.ARIES, 10),),
        day_ruler=Planet.JUPITER,
    )


@pytest.fixture
def app():
    """Flask application configured for testing."""
    from app import app as flask_app

    flask_app.config.update({'TESTING': True})
    yield flask_app


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture
def sample_context_payload():
    """Sample context in its JSON form."""
    return {
        'transits': [
            {'transit_planet': 'Jupiter', 'natal_planet': 'Sun', 'type': 'trine',
             'orb': 0.0, 'applying': True},
        ],
        'retrogrades': [],
        'moon_phase': 'Waxing Crescent',
        'placements': [
            {'planet': 'Moon', 'sign': 'Aries', 'degree': 10, 'minute': 0},
        ],
        'day_ruler': 'Jupiter',
    }
