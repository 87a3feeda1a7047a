from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models in the MeetingFlow service.

    ORM models are registered on Base.metadata by importing them from
    app.db.session, which owns schema creation.
    """
    pass
