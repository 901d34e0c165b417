from typing import Any

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from storeseed.models.base import Base, TimestampMixin


class Document(TimestampMixin, Base):
    __tablename__ = "documents"

    collection: Mapped[str] = mapped_column(String(100), primary_key=True)
    doc_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    data: Mapped[dict[str, Any]] = mapped_column(nullable=False, default=dict)

    def __repr__(self) -> str:
        return f"<Document collection={self.collection!r} doc_id={self.doc_id!r}>"
