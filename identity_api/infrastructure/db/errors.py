from __future__ import annotations

from contextlib import contextmanager
import logging
from typing import Iterator

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from identity_api.domain.exceptions import ConflictError, UnavailableError


logger = logging.getLogger(__name__)


@contextmanager
def translate_storage_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except IntegrityError as exc:
        logger.info("storage: unique_violation operation=%s", operation)
        raise ConflictError("User with email or username already exists.") from exc
    except (OperationalError, PoolTimeoutError) as exc:
        logger.warning("storage: unavailable operation=%s error=%s", operation, exc.__class__.__name__)
        raise UnavailableError("Storage is temporarily unavailable.") from exc
