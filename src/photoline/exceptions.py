import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class PhotolineError(Exception):
    """Base class for errors the timeline core hands back to its caller."""

    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class BadRequestError(PhotolineError):
    """Malformed or mutually exclusive request filters."""

    status_code = 400


class AccessDeniedError(PhotolineError):
    """The principal lacks a permission over one or more resource ids."""

    status_code = 403


class UpstreamReadError(PhotolineError):
    """A relationship, access or bucket read failed in the storage layer."""

    status_code = 500


@contextmanager
def upstream_read(source: str) -> Iterator[None]:
    """Re-raise storage failures inside the block as UpstreamReadError."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.error("Read from %s failed: %s", source, e)
        raise UpstreamReadError(f"Failed to read {source}") from e
