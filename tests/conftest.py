"""
Pytest 配置和共享 fixtures
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from decimal import Decimal
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from bookstore.database import Base, get_db
from bookstore.models import ontology  # noqa: F401
from bookstore.models.ontology import Author, Publisher, Book, BookAuthor, BookTranslator
from bookstore.main import app


@pytest.fixture(scope="function")
def db_engine():
    """创建内存数据库引擎"""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """创建数据库会话"""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture(scope="function")
def client(db_session):
    """创建测试客户端"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ============== 实体相关 Fixtures ==============

@pytest.fixture
def sample_publisher(db_session):
    """创建测试出版社"""
    publisher = Publisher(name="Acme Press")
    db_session.add(publisher)
    db_session.commit()
    db_session.refresh(publisher)
    return publisher


@pytest.fixture
def sample_author(db_session):
    """创建测试作者"""
    author = Author(name="Ada Lovelace", country="UK")
    db_session.add(author)
    db_session.commit()
    db_session.refresh(author)
    return author


@pytest.fixture
def sample_author_2(db_session):
    """创建第二个测试作者"""
    author = Author(name="Charles Babbage", country="UK")
    db_session.add(author)
    db_session.commit()
    db_session.refresh(author)
    return author


@pytest.fixture
def sample_translator(db_session):
    """创建测试译者"""
    translator = Author(name="Li Hua")
    db_session.add(translator)
    db_session.commit()
    db_session.refresh(translator)
    return translator


@pytest.fixture
def sample_book(db_session, sample_publisher, sample_author, sample_translator):
    """创建测试书籍：一个作者、一个译者"""
    book = Book(
        title="Notes on the Analytical Engine",
        isbn="978-0-00-000001-1",
        price=Decimal("19.99"),
        edition="1st",
        printing="2025-06",
        image_url="http://example.com/cover.jpg",
        publisher_id=sample_publisher.id,
    )
    book.author_links = [BookAuthor(author_id=sample_author.id, sort_order=0)]
    book.translator_links = [BookTranslator(translator_id=sample_translator.id, sort_order=0)]
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book
