import sys, os

import pytest

# Ensure src is on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from tetris_crush.game import GameConfig, GameSession, Variant


@pytest.fixture
def line_session():
    return GameSession(GameConfig(variant=Variant.LINE_CLEAR, random_seed=7))


@pytest.fixture
def match_session():
    return GameSession(GameConfig(variant=Variant.MATCH_THREE, width=8, height=10, random_seed=7))
