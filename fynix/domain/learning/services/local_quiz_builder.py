"""
Offline quiz builders.

Used whenever the AI path is unavailable. Both builders only need a
``random.Random`` so tests can pin the output with a seed.
"""

import random
import re
from collections.abc import Sequence

from fynix.domain.learning.entities.quiz_item import QuizDirection, QuizItem, QuizMode
from fynix.domain.vocabulary.entities.vocab_list import VocabPair

MAX_QUIZ_ITEMS = 5
MAX_OPTIONS = 4
MIN_SENTENCE_LENGTH = 20
NOT_MENTIONED = "Not mentioned"

_SENTENCE_BOUNDARY = re.compile(r"[.!?]+")


def pick_options(answer: str, pool: Sequence[str], rng: random.Random) -> tuple[str, ...]:
    """
    Build up to four unique options containing ``answer``.

    Args:
        answer: The correct option
        pool: Candidate values; duplicates and the answer itself are ignored
        rng: Source of randomness for distractor choice and order

    Returns:
        Shuffled options; fewer than four when the pool is small
    """
    distractors = [value for value in dict.fromkeys(pool) if value != answer]
    chosen = rng.sample(distractors, min(MAX_OPTIONS - 1, len(distractors)))
    options = [answer, *chosen]
    rng.shuffle(options)
    return tuple(options)


def build_local_vocab_quiz(
    entries: Sequence[VocabPair],
    source_lang: str,
    target_lang: str,
    mode: QuizMode,
    direction: QuizDirection,
    rng: random.Random,
) -> list[QuizItem]:
    """
    Build a vocabulary quiz from the list itself.

    Up to five entries are drawn at random. With ``MIXED`` each item flips
    a coin for its direction. Multiple choice options come from the same
    side of the other entries.
    """
    picked = rng.sample(list(entries), min(MAX_QUIZ_ITEMS, len(entries)))
    terms = [entry.term for entry in entries]
    translations = [entry.translation for entry in entries]

    items: list[QuizItem] = []
    for entry in picked:
        item_direction = direction
        if direction == QuizDirection.MIXED:
            item_direction = rng.choice((QuizDirection.SOURCE_TARGET, QuizDirection.TARGET_SOURCE))

        if item_direction == QuizDirection.SOURCE_TARGET:
            word, answer, pool = entry.term, entry.translation, translations
            label = f"{source_lang} → {target_lang}"
        else:
            word, answer, pool = entry.translation, entry.term, terms
            label = f"{target_lang} → {source_lang}"

        options = pick_options(answer, pool, rng) if mode == QuizMode.MULTIPLE_CHOICE else None
        items.append(QuizItem(question=f"Translate ({label}): {word}", answer=answer, options=options))
    return items


def split_sentences(text: str) -> list[str]:
    """Sentences longer than the minimum length, in text order."""
    sentences = (part.strip() for part in _SENTENCE_BOUNDARY.split(text))
    return [sentence for sentence in sentences if len(sentence) > MIN_SENTENCE_LENGTH]


def build_local_material_quiz(text: str, rng: random.Random) -> list[QuizItem]:
    """
    Build a recall quiz from the sentences of the material.

    Each question asks which statement appears in the material; the other
    sentences serve as distractors, padded with "Not mentioned".
    """
    sentences = list(dict.fromkeys(split_sentences(text)))
    items: list[QuizItem] = []
    for sentence in sentences[:MAX_QUIZ_ITEMS]:
        others = [other for other in sentences if other != sentence]
        distractors = rng.sample(others, min(MAX_OPTIONS - 1, len(others)))
        if len(distractors) < MAX_OPTIONS - 1:
            distractors.append(NOT_MENTIONED)
        options = [sentence, *distractors]
        rng.shuffle(options)
        items.append(
            QuizItem(
                question="Which statement appears in your material?",
                answer=sentence,
                options=tuple(options),
            )
        )
    return items
