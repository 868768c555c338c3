from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session


@contextmanager
def smart_transaction(session: Session) -> Iterator:
    """
    Context manager that runs the block atomically on the given Session.
    If a transaction is already active, the block runs inside a SAVEPOINT
    (begin_nested) and the enclosing transaction is committed afterwards so
    the write is durable and visible to other sessions.
    Otherwise a normal transaction (begin) is started and committed on exit.
    Usage:
        with smart_transaction(db):
            ... DB work ...
    """
    if session.in_transaction():
        with session.begin_nested():
            yield
        session.commit()
    else:
        with session.begin():
            yield
