from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String, UniqueConstraint

from app.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PersonRole(Base):
    """
    Role assigned to one attendee email by one owning user.

    Absence of a row for an attendee means "unassigned".
    """

    __tablename__ = "people_roles"

    id = Column(Integer, primary_key=True, index=True)

    owner_email = Column(String(320), nullable=False, index=True)
    person_email = Column(String(320), nullable=False)
    role = Column(String(64), nullable=False)

    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )

    __table_args__ = (
        UniqueConstraint(
            "owner_email",
            "person_email",
            name="uq_people_roles_owner_person",
        ),
    )

    def __repr__(self) -> str:
        return (
            f"<PersonRole owner={self.owner_email} person={self.person_email} "
            f"role={self.role}>"
        )
