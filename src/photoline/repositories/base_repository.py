from sqlalchemy.orm import Session


class BaseRepository:
    """Repositories read through the request's session and never commit."""

    def __init__(self, db: Session):
        self.db = db
