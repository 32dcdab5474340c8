"""
Vocabulary parser.

Turns noisy multi-line text (typed, pasted or OCR output) into ordered
term/translation pairs. Each line is normalized and tried against the
separator rules, then the ``term (translation)`` form. When no line yields a
pair, consecutive lines are paired up instead (OCR of two-column sheets
often produces one word per line).
"""

import re

from fynix.domain.vocabulary.entities.vocab_list import VocabPair

MAX_TERM_LENGTH = 200

SEPARATORS = (" - ", " – ", " : ", " / ", "\t")
BARE_SEPARATORS = (":", "=")

_DASH_VARIANTS = re.compile("[‐‑–—―−]")
_EQUALS_OR_COLON = re.compile(r"\s*[=:]\s*")
_SPACE_RUNS = re.compile(r"\s{2,}")
_BULLETS = re.compile(r"^[-*•·\s]+")
_BRACKETED = re.compile(r"^(.+?)\s*[(\[]([^)\]]+)[)\]]\s*$")
_NUMERIC = re.compile(r"^\d+$")


def normalize_line(line: str) -> str:
    """Rewrite separator variants to `` - `` and strip bullet markers."""
    line = line.replace("\t", " - ")
    line = _DASH_VARIANTS.sub(" - ", line)
    line = _EQUALS_OR_COLON.sub(" - ", line)
    line = _SPACE_RUNS.sub(" ", line)
    return _BULLETS.sub("", line.strip()).strip()


def _split_on_separator(line: str) -> tuple[str, str] | None:
    for separator in SEPARATORS:
        if separator in line:
            term, _, translation = line.partition(separator)
            return term.strip(), translation.strip()
    if not line.startswith("http"):
        for separator in BARE_SEPARATORS:
            if separator in line:
                term, _, translation = line.partition(separator)
                return term.strip(), translation.strip()
    return None


def _split_bracketed(line: str) -> tuple[str, str] | None:
    match = _BRACKETED.match(line)
    if match is None:
        return None
    return match.group(1).strip(), match.group(2).strip()


def _is_acceptable(term: str, translation: str) -> bool:
    return bool(term) and bool(translation) and len(term) < MAX_TERM_LENGTH


def parse_vocab_pairs(text: str) -> list[VocabPair]:
    """
    Parse vocabulary pairs out of free text.

    Args:
        text: Raw text, one pair per line in any of the supported notations

    Returns:
        Pairs in input order; empty when nothing recognizable was found
    """
    lines = [line for line in (normalize_line(raw) for raw in text.splitlines()) if line]

    pairs: list[VocabPair] = []
    for line in lines:
        candidate = _split_on_separator(line) or _split_bracketed(line)
        if candidate is not None and _is_acceptable(*candidate):
            pairs.append(VocabPair(term=candidate[0], translation=candidate[1]))

    if pairs or len(lines) < 2:
        return pairs

    for term, translation in zip(lines[0::2], lines[1::2]):
        if _NUMERIC.match(term):
            continue
        if _is_acceptable(term, translation):
            pairs.append(VocabPair(term=term, translation=translation))
    return pairs
