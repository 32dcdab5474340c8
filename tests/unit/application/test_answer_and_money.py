"""Tests for answer scoring and the money log use case."""

import pytest

from fynix.application.learning.use_cases.answer_quiz_use_case import AnswerQuizUseCase
from fynix.application.money.record_money_entry_use_case import RecordMoneyEntryUseCase
from fynix.domain.common.exceptions import ValidationError
from fynix.domain.feed.seed_cards import seed_feed_items
from fynix.domain.learning.entities.quiz_item import QuizKind
from fynix.domain.money.entities.money_entry import MoneyDirection
from fynix.exceptions import FeedItemNotFoundError


@pytest.fixture
def guest_store(store):
    store.login_as_guest()
    return store


class TestAnswerQuizUseCase:
    @pytest.mark.parametrize(("kind", "xp"), [(QuizKind.MATERIAL, 20), (QuizKind.VOCABULARY, 15)])
    def test_correct_answer_credits_xp(self, guest_store, kind, xp):
        result = AnswerQuizUseCase(guest_store).answer(kind, given=" Paris ", expected="paris")
        assert result.correct
        assert result.xp_delta == xp
        assert guest_store.user.xp == xp

    def test_wrong_material_answer_costs_nothing(self, guest_store):
        result = AnswerQuizUseCase(guest_store).answer(QuizKind.MATERIAL, given="Rome", expected="Paris")
        assert not result.correct
        assert result.xp_delta == 0

    def test_feed_answers(self, guest_store):
        guest_store.seed_feed(seed_feed_items())
        quiz = guest_store.snapshot().feed[0].quiz
        use_case = AnswerQuizUseCase(guest_store)

        right = use_case.answer_feed(0, quiz.correct)
        wrong = use_case.answer_feed(0, (quiz.correct + 1) % len(quiz.options))

        assert (right.correct, right.xp_delta) == (True, 25)
        assert (wrong.correct, wrong.xp_delta) == (False, -5)
        assert wrong.expected == quiz.correct_option
        assert guest_store.user.xp == 20

    def test_feed_penalty_floors_at_zero(self, guest_store):
        guest_store.seed_feed(seed_feed_items())
        quiz = guest_store.snapshot().feed[0].quiz
        result = AnswerQuizUseCase(guest_store).answer_feed(0, (quiz.correct + 1) % len(quiz.options))
        assert result.xp_delta == 0
        assert guest_store.user.xp == 0

    def test_feed_bounds(self, guest_store):
        guest_store.seed_feed(seed_feed_items())
        use_case = AnswerQuizUseCase(guest_store)
        with pytest.raises(FeedItemNotFoundError):
            use_case.answer_feed(99, 0)
        with pytest.raises(ValidationError):
            use_case.answer_feed(0, 9)


class TestRecordMoneyEntryUseCase:
    def test_income_earns_xp(self, guest_store):
        record = RecordMoneyEntryUseCase(guest_store).execute(
            amount=40, direction=MoneyDirection.INCOME, note="Taschengeld von Oma"
        )
        assert record.entry.category == "Taschengeld"
        assert record.xp_awarded == 5
        assert not record.milestone_reached

    def test_expense_earns_nothing(self, guest_store):
        record = RecordMoneyEntryUseCase(guest_store).execute(
            amount=8.5, direction=MoneyDirection.EXPENSE, note="Döner"
        )
        assert record.entry.category == "Essen"
        assert record.xp_awarded == 0

    def test_crossing_hundred_balance_earns_bonus(self, guest_store):
        use_case = RecordMoneyEntryUseCase(guest_store)
        use_case.execute(amount=80, direction=MoneyDirection.INCOME, category="Nebenjob")
        record = use_case.execute(amount=30, direction=MoneyDirection.INCOME, category="Nebenjob")
        assert record.milestone_reached
        assert record.xp_awarded == 3 + 50

    def test_invalid_amount_leaves_log_unchanged(self, guest_store):
        with pytest.raises(ValidationError):
            RecordMoneyEntryUseCase(guest_store).execute(
                amount=-3, direction=MoneyDirection.EXPENSE, category="Essen"
            )
        assert guest_store.snapshot().money == []
