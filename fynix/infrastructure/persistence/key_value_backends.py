"""Key-value backends holding the serialized state documents."""

from typing import Protocol

from sqlalchemy.orm import Session, sessionmaker

from fynix.infrastructure.persistence.models import KeyValueRecord


class KeyValueBackend(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class InMemoryKeyValueBackend:
    """Dict-backed backend for tests and ephemeral sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


class SqlAlchemyKeyValueBackend:
    """Backend storing each key as one row of the ``kv_store`` table."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self.session_factory = session_factory

    def get(self, key: str) -> str | None:
        with self.session_factory() as session:
            record = session.get(KeyValueRecord, key)
            return record.value if record is not None else None

    def set(self, key: str, value: str) -> None:
        with self.session_factory.begin() as session:
            record = session.get(KeyValueRecord, key)
            if record is None:
                session.add(KeyValueRecord(key=key, value=value))
            else:
                record.value = value

    def delete(self, key: str) -> None:
        with self.session_factory.begin() as session:
            record = session.get(KeyValueRecord, key)
            if record is not None:
                session.delete(record)
