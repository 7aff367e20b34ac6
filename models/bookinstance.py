from datetime import date

from sqlalchemy import Column, String, ForeignKey, Date, Enum
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base, format_date_med, format_date_iso

STATUSES = ("Available", "Maintenance", "Loaned", "Reserved")
DEFAULT_STATUS = "Maintenance"


class BookInstance(BaseModel, Base):
    """A physical copy of a book."""

    __tablename__ = "book_instances"
    url_segment = "bookinstance"

    book_id = Column(String(36), ForeignKey("books.id"), nullable=False, index=True)
    imprint = Column(String(255), nullable=False)
    status = Column(
        Enum(*STATUSES, name="bookinstance_status", validate_strings=True),
        nullable=False,
        default=DEFAULT_STATUS,
    )
    due_back = Column(Date, nullable=True, default=date.today)

    book = relationship("Book", back_populates="instances")

    @property
    def due_back_formatted(self) -> str:
        return format_date_med(self.due_back)

    @property
    def due_back_iso(self) -> str:
        return format_date_iso(self.due_back)
