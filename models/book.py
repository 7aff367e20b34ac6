from sqlalchemy import (
    Column,
    String,
    ForeignKey,
    Table,
    Text,
    Index,
)
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base

# Association table for the book -> genres references.
# No ON DELETE rules: references are plain keys and removing a record does not cascade.
book_genres = Table(
    "book_genres",
    Base.metadata,
    Column("book_id", String(36), ForeignKey("books.id"), primary_key=True),
    Column("genre_id", String(36), ForeignKey("genres.id"), primary_key=True),
)


class Book(BaseModel, Base):
    __tablename__ = "books"
    url_segment = "book"

    title = Column(String(255), nullable=False)
    summary = Column(Text, nullable=False)
    isbn = Column(String(32), nullable=False)

    author_id = Column(String(36), ForeignKey("authors.id"), nullable=False)

    # Relationships
    author = relationship("Author", back_populates="books")
    genres = relationship("Genre", secondary=book_genres, back_populates="books")
    instances = relationship("BookInstance", back_populates="book", passive_deletes="all")

    __table_args__ = (
        Index("ix_books_title", "title"),
    )

    @property
    def genre_ids(self) -> list:
        return [g.id for g in self.genres]
