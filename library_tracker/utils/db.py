from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session


@contextmanager
def transaction(session: Session) -> Iterator[Session]:
    """Single commit point for a multi-step write.

    Everything done on ``session`` inside the block is committed together, or
    rolled back together if any step raises.
    """
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
