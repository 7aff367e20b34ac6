"""
ORM entities and the storage object for the library catalog.

The storage instance is not created here: the application factory builds one
DBStorage per app and hands it to the request handlers.
"""
from models.base_model import Base
from models.author import Author
from models.book import Book
from models.bookinstance import BookInstance
from models.genre import Genre
from models.db_storage import DBStorage

__all__ = ["Base", "Author", "Book", "BookInstance", "Genre", "DBStorage"]
