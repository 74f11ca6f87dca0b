"""tutorials table."""

import uuid

from sqlalchemy import Boolean, Index, Text, Uuid, false, text
from sqlalchemy.orm import Mapped, mapped_column

from tutorialsapi.core.database import Base, TimestampMixin


class Tutorial(TimestampMixin, Base):
    __tablename__ = "tutorials"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="", server_default=text("''"))
    published: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )

    __table_args__ = (
        Index("idx_tutorials_published", "published"),
        Index("idx_tutorials_created", "created_at", "id"),
    )

    def __repr__(self) -> str:
        return f"<Tutorial id={self.id} title={self.title!r} published={self.published}>"
