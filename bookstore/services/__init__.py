# Services
from bookstore.services.book_service import BookService, sanitize_book_update
from bookstore.services.author_service import AuthorService
from bookstore.services.publisher_service import PublisherService
from bookstore.services.relation_resolver import RelationResolver
from bookstore.services.user_service import UserService

__all__ = [
    'BookService', 'sanitize_book_update', 'AuthorService',
    'PublisherService', 'RelationResolver', 'UserService'
]
