# Ontology Models
from bookstore.models.ontology import (
    Publisher, Author, Book, BookAuthor, BookTranslator, User, Gender
)

__all__ = [
    'Publisher', 'Author', 'Book', 'BookAuthor', 'BookTranslator', 'User', 'Gender'
]
