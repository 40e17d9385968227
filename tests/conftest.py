"""
Pytest configuration and shared fixtures for speed quiz tests.
"""

import random

import pytest

from speed_quiz.constants.game_constants import COUNTDOWN_STEPS
from speed_quiz.core.models import GroupInput, Quiz, QuizGroup, QuizInput
from speed_quiz.core.quiz_manager import QuizManager
from speed_quiz.core.services.turn_engine import TurnEngine
from speed_quiz.core.ticker import ManualTickScheduler

SEED = 1234


def build_quiz(groups, time_per_quiz=30, pass_limit=1, quiz_id=1, title="Friday Night"):
    """Build a validated-looking quiz from ``{name: [words]}``; group ids are the names."""
    return Quiz(
        id=quiz_id,
        title=title,
        groups=tuple(QuizGroup(id=name, name=name, words=tuple(words)) for name, words in groups.items()),
        time_per_quiz=time_per_quiz,
        pass_limit=pass_limit,
    )


def build_quiz_input(groups=None, time_per_quiz=30, pass_limit=1, title="Friday Night"):
    groups = groups or {"Group A": ["apple", "banana"], "Group B": ["dog", "cat"]}
    return QuizInput(
        title=title,
        groups=[GroupInput(name=name, words=list(words)) for name, words in groups.items()],
        time_per_quiz=time_per_quiz,
        pass_limit=pass_limit,
    )


def finish_countdown(scheduler):
    scheduler.advance(COUNTDOWN_STEPS)


@pytest.fixture
def rng():
    return random.Random(SEED)


@pytest.fixture
def scheduler():
    return ManualTickScheduler()


@pytest.fixture
def events():
    """List that collects every event emitted into it."""
    return []


@pytest.fixture
def engine(scheduler, rng, events):
    return TurnEngine(scheduler=scheduler, rng=rng, emit=events.append)


@pytest.fixture
def two_group_quiz():
    return build_quiz({"A": ["x", "y"], "B": ["p", "q"]}, time_per_quiz=30, pass_limit=1)


@pytest.fixture
def manager(scheduler, rng):
    return QuizManager(scheduler=scheduler, rng=rng)
