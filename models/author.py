from sqlalchemy import Column, String, Date
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base, format_date_med, format_date_iso


class Author(BaseModel, Base):
    __tablename__ = "authors"
    url_segment = "author"

    first_name = Column(String(100), nullable=False)
    family_name = Column(String(100), nullable=False)
    date_of_birth = Column(Date, nullable=True)
    date_of_death = Column(Date, nullable=True)

    # No cascade: removing an author leaves its books referencing it
    books = relationship("Book", back_populates="author", passive_deletes="all")

    @property
    def name(self) -> str:
        """Full name, family name first."""
        return f"{self.family_name}, {self.first_name}"

    @property
    def lifespan(self) -> str:
        """Birth and death dates; the dash only appears when both are known."""
        lifespan = format_date_med(self.date_of_birth)
        if self.date_of_death:
            if lifespan:
                lifespan += " - "
            lifespan += format_date_med(self.date_of_death)
        return lifespan

    @property
    def date_of_birth_iso(self) -> str:
        return format_date_iso(self.date_of_birth)

    @property
    def date_of_death_iso(self) -> str:
        return format_date_iso(self.date_of_death)
