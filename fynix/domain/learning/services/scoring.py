"""XP awarded per quiz answer."""

from dataclasses import dataclass

from fynix.domain.learning.entities.quiz_item import QuizKind


@dataclass(frozen=True)
class AnswerReward:
    correct_xp: int
    wrong_penalty: int = 0


ANSWER_REWARDS: dict[QuizKind, AnswerReward] = {
    QuizKind.MATERIAL: AnswerReward(correct_xp=20),
    QuizKind.VOCABULARY: AnswerReward(correct_xp=15),
    QuizKind.FEED: AnswerReward(correct_xp=25, wrong_penalty=5),
}
