"""
Tests for speed_quiz/core/quiz_manager.py

Full games played through the facade the desktop host uses.
"""

import pytest

from conftest import build_quiz_input, finish_countdown
from speed_quiz.core.events import GameEventType
from speed_quiz.core.exceptions import QuizNotFoundError, TieBreakError, TurnRejectedError
from speed_quiz.core.models import JudgmentOutcome, TurnEndReason
from speed_quiz.core.quiz_exporter import export_file_name


@pytest.fixture
def received(manager):
    events = []
    manager.subscribe(events.append)
    return events


@pytest.fixture
def quiz(manager):
    return manager.create_quiz(
        build_quiz_input({"A": ["a1", "a2", "a3"], "B": ["b1", "b2", "b3"]}, time_per_quiz=30, pass_limit=1)
    )


def play(manager, scheduler, group_id, correct):
    """Run a turn scoring ``correct`` points and stop it."""
    manager.select_group(group_id)
    finish_countdown(scheduler)
    for _ in range(correct):
        manager.judge(JudgmentOutcome.CORRECT)
    if manager.has_active_turn():
        manager.abort_turn()


def group_ids(quiz):
    return [group.id for group in quiz.groups]


class TestSessionLifecycle:
    """Tests for starting, playing and restarting sessions."""

    def test_start_unknown_quiz(self, manager):
        with pytest.raises(QuizNotFoundError):
            manager.start_session(404)

    def test_full_game_without_tie(self, manager, scheduler, quiz, received):
        first, second = group_ids(quiz)
        manager.start_session(quiz.id)

        play(manager, scheduler, first, 2)
        assert not manager.is_session_complete()
        play(manager, scheduler, second, 1)

        assert manager.is_session_complete()
        standings = manager.get_standings()
        assert [entry.group_id for entry in standings.entries] == [first, second]
        assert manager.get_bonus_round_offer() is None
        types = [event.type for event in received]
        assert types.count(GameEventType.TURN_ENDED) == 2
        assert GameEventType.SESSION_COMPLETE in types
        assert types[-1] is GameEventType.STANDINGS_UPDATED

    def test_turn_ended_listeners_see_the_updated_sheet(self, manager, scheduler, quiz):
        first, second = group_ids(quiz)
        seen = []

        def on_event(event):
            if event.type is GameEventType.TURN_ENDED:
                state = manager.get_group_state(first)
                seen.append((state.played, state.score, [group.id for group in manager.get_selectable_groups()]))

        manager.subscribe(on_event)
        manager.start_session(quiz.id)
        play(manager, scheduler, first, 1)

        assert seen == [(True, 1, [second])]

    def test_ticks_reach_the_engine_through_the_scheduler(self, manager, scheduler, quiz):
        first, _ = group_ids(quiz)
        manager.start_session(quiz.id)
        manager.select_group(first)

        finish_countdown(scheduler)
        scheduler.advance(30)

        result = manager.get_last_turn_result()
        assert result.reason is TurnEndReason.TIME_UP
        assert manager.get_group_state(first).played
        assert scheduler.active_count() == 0

    def test_restart_resets_scores(self, manager, scheduler, quiz):
        first, _ = group_ids(quiz)
        manager.start_session(quiz.id)
        play(manager, scheduler, first, 2)

        manager.restart_session()

        assert manager.get_group_state(first).score == 0
        assert len(manager.get_selectable_groups()) == 2
        assert manager.get_last_turn_result() is None

    def test_restart_needs_a_session(self, manager):
        with pytest.raises(TurnRejectedError):
            manager.restart_session()

    def test_stop_session_aborts_running_turn(self, manager, scheduler, quiz):
        first, _ = group_ids(quiz)
        manager.start_session(quiz.id)
        manager.select_group(first)

        manager.stop_session()

        assert not manager.has_active_turn()
        assert scheduler.active_count() == 0

    def test_end_early_then_standings(self, manager, scheduler):
        quiz = manager.create_quiz(build_quiz_input({"A": ["a"], "B": ["b"], "C": ["c"]}))
        first = quiz.groups[0].id
        manager.start_session(quiz.id)
        play(manager, scheduler, first, 1)

        manager.end_session_early()

        assert manager.is_session_finished()
        assert manager.get_selectable_groups() == []
        standings = manager.get_standings()
        assert standings.entries[0].group_id == first
        assert len(standings.entries) == 3

    def test_shuffle_seed_makes_word_order_repeatable(self, manager, quiz):
        first, _ = group_ids(quiz)
        manager.set_shuffle_seed(7)
        manager.start_session(quiz.id)
        order = manager.select_group(first).words
        manager.stop_session()

        manager.set_shuffle_seed(7)
        manager.restart_session()

        assert manager.select_group(first).words == order

    def test_swapping_scheduler_keeps_session(self, manager, scheduler, quiz):
        first, _ = group_ids(quiz)
        manager.start_session(quiz.id)
        play(manager, scheduler, first, 1)

        manager.set_tick_scheduler(None)

        assert manager.get_group_state(first).score == 1


class TestBonusRounds:
    """Tests for settling ties through the facade."""

    @pytest.fixture
    def tied_game(self, manager, scheduler, quiz):
        first, second = group_ids(quiz)
        manager.start_session(quiz.id)
        play(manager, scheduler, first, 1)
        play(manager, scheduler, second, 1)
        return first, second

    def test_tie_is_offered(self, manager, tied_game, received):
        standings = manager.get_standings()

        assert standings.medal_ties == (tied_game,)
        assert manager.get_bonus_round_offer() == tied_game
        assert received[-1].type is GameEventType.TIE_DETECTED

    def test_bonus_round_decides_order_without_changing_scores(self, manager, scheduler, tied_game):
        manager.start_bonus_round()
        assert manager.is_bonus_round_active()
        participants = manager.get_bonus_participants()
        assert set(participants) == set(tied_game)

        finish_countdown(scheduler)
        manager.judge(JudgmentOutcome.CORRECT, participants[1])

        result = manager.get_last_bonus_result()
        assert result.winner_id == participants[1]
        assert not manager.is_bonus_round_active()
        standings = manager.get_standings()
        assert standings.entries[0].group_id == participants[1]
        assert standings.entry_for(participants[1]).rank < standings.entry_for(participants[0]).rank
        assert [state.score for state in manager.get_group_states()] == [1, 1]
        assert manager.get_bonus_round_offer() is None

    def test_bonus_history_stays_out_of_group_sheets(self, manager, scheduler, tied_game):
        before = [len(state.history) for state in manager.get_group_states()]
        manager.start_bonus_round()
        finish_countdown(scheduler)
        manager.judge(JudgmentOutcome.WRONG)
        manager.judge(JudgmentOutcome.CORRECT, tied_game[0])

        assert [len(state.history) for state in manager.get_group_states()] == before
        assert len(manager.get_last_bonus_result().history) == 2

    def test_aborted_bonus_round_is_not_offered_again(self, manager, tied_game):
        manager.start_bonus_round()
        manager.abort_turn()

        assert manager.get_last_bonus_result().decisive is False
        assert manager.get_standings().has_medal_tie
        assert manager.get_bonus_round_offer() is None
        with pytest.raises(TieBreakError):
            manager.start_bonus_round()

    def test_skip_leaves_scores_untouched(self, manager, tied_game):
        manager.skip_bonus_round()

        assert [state.score for state in manager.get_group_states()] == [1, 1]
        assert manager.get_bonus_round_offer() == tied_game

    def test_bonus_round_needs_finished_game(self, manager, scheduler, quiz):
        manager.start_session(quiz.id)
        with pytest.raises(TieBreakError):
            manager.start_bonus_round()

    def test_second_start_keeps_the_running_pair(self, manager, scheduler):
        quiz = manager.create_quiz(build_quiz_input({f"G{i}": [f"w{i}"] for i in range(6)}))
        manager.start_session(quiz.id)
        for group_id in group_ids(quiz):
            play(manager, scheduler, group_id, 0)
        manager.start_bonus_round()
        running = manager.get_turn_state().participants

        with pytest.raises(TieBreakError):
            manager.start_bonus_round()

        assert manager.get_bonus_participants() == running
        finish_countdown(scheduler)
        manager.judge(JudgmentOutcome.CORRECT, manager.get_bonus_participants()[0])
        assert manager.get_last_bonus_result().winner_id == running[0]

    def test_skip_refused_while_bonus_round_runs(self, manager, tied_game):
        manager.start_bonus_round()
        with pytest.raises(TieBreakError):
            manager.skip_bonus_round()


class TestLibrary:
    """Tests for quiz management through the facade."""

    def test_crud(self, manager):
        quiz = manager.create_quiz(build_quiz_input())
        assert manager.get_quiz(quiz.id) == quiz
        assert manager.list_quizzes() == [quiz]

        updated = manager.update_quiz(quiz.id, pass_limit=0)
        assert updated.pass_limit == 0

        manager.delete_quiz(quiz.id)
        assert manager.list_quizzes() == []

    def test_import_and_export(self, manager, tmp_path):
        quiz = manager.create_quiz(build_quiz_input(title="Animal Party"))
        path = tmp_path / export_file_name(quiz)

        manager.export_quiz_file(quiz.id, path)
        imported = manager.import_quiz_file(path)

        assert imported.id != quiz.id
        assert imported.title == "Animal Party"
        assert [group.words for group in imported.groups] == [group.words for group in quiz.groups]

    def test_export_unknown_quiz(self, manager, tmp_path):
        with pytest.raises(QuizNotFoundError):
            manager.export_quiz_file(3, tmp_path / "x.json")

    def test_unsubscribe(self, manager, quiz):
        events = []
        manager.subscribe(events.append)
        manager.unsubscribe(events.append)
        manager.start_session(quiz.id)
        assert events == []
