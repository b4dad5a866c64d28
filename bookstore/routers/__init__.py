# API Routers
from bookstore.routers import books, authors, publishers, users

__all__ = ['books', 'authors', 'publishers', 'users']
