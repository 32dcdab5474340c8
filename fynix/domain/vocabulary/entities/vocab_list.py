"""
Vocabulary list aggregate.

A VocabList owns its entries; entry ids are unique within the list.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from fynix.domain.common.exceptions import ValidationError
from fynix.domain.common.identifiers import generate_id


@dataclass(frozen=True)
class VocabPair:
    """A term with its translation, before it belongs to any list."""

    term: str
    translation: str


@dataclass
class VocabEntry:
    id: str
    term: str
    translation: str
    created_at: str

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.term or not self.term.strip():
            raise ValidationError("Term cannot be empty", field="term")
        if not self.translation or not self.translation.strip():
            raise ValidationError("Translation cannot be empty", field="translation")

    def as_pair(self) -> VocabPair:
        return VocabPair(term=self.term, translation=self.translation)


@dataclass
class VocabList:
    """
    Named list of vocabulary entries for one language pair.

    Business Rules:
    - Name cannot be empty
    - Entry ids are unique within the list
    - Entries keep insertion order
    """

    id: str
    name: str
    source_lang: str
    target_lang: str
    created_at: str
    entries: list[VocabEntry] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.name or not self.name.strip():
            raise ValidationError("List name cannot be empty", field="name")

    def _next_entry_id(self) -> str:
        taken = {entry.id for entry in self.entries}
        entry_id = generate_id()
        while entry_id in taken:
            entry_id = generate_id()
        return entry_id

    def add_entries(self, pairs: Iterable[VocabPair], created_at: str) -> list[VocabEntry]:
        """
        Append pairs as new entries.

        Args:
            pairs: Term/translation pairs in the order they should appear
            created_at: Timestamp stamped on every new entry

        Returns:
            The entries that were appended
        """
        added: list[VocabEntry] = []
        for pair in pairs:
            entry = VocabEntry(
                id=self._next_entry_id(),
                term=pair.term.strip(),
                translation=pair.translation.strip(),
                created_at=created_at,
            )
            self.entries.append(entry)
            added.append(entry)
        return added

    def find_entry(self, entry_id: str) -> VocabEntry | None:
        return next((entry for entry in self.entries if entry.id == entry_id), None)

    def remove_entry(self, entry_id: str) -> bool:
        before = len(self.entries)
        self.entries = [entry for entry in self.entries if entry.id != entry_id]
        return len(self.entries) != before

    def update_entry(
        self, entry_id: str, term: str | None = None, translation: str | None = None
    ) -> VocabEntry | None:
        """Edit an entry in place. Returns None when the entry does not exist."""
        entry = self.find_entry(entry_id)
        if entry is None:
            return None
        if term is not None:
            if not term.strip():
                raise ValidationError("Term cannot be empty", field="term")
            entry.term = term.strip()
        if translation is not None:
            if not translation.strip():
                raise ValidationError("Translation cannot be empty", field="translation")
            entry.translation = translation.strip()
        return entry

    def pairs(self) -> list[VocabPair]:
        return [entry.as_pair() for entry in self.entries]

    @classmethod
    def create(
        cls, name: str, source_lang: str, target_lang: str, created_at: str
    ) -> "VocabList":
        return cls(
            id=generate_id(),
            name=name.strip(),
            source_lang=source_lang.strip(),
            target_lang=target_lang.strip(),
            created_at=created_at,
        )
