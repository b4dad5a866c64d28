"""
书籍管理 API 测试
覆盖 /books 端点，包括按名称创建关联和错误码映射
"""
from fastapi.testclient import TestClient

from bookstore.models.ontology import Author, Publisher


def _payload(**overrides):
    data = {
        "title": "Sample Title",
        "isbn": "123-456",
        "price": "19.99",
        "edition": "1st",
        "printing": "2025-06",
        "image_url": "http://example.com/cover.jpg",
        "remark": "Test remark",
    }
    data.update(overrides)
    return data


class TestCreateBook:

    def test_create_with_ids(self, client: TestClient, sample_author, sample_translator, sample_publisher):
        response = client.post("/books", json=_payload(
            author_ids=[sample_author.id],
            translator_ids=[sample_translator.id],
            publisher_id=sample_publisher.id,
        ))

        assert response.status_code == 201
        data = response.json()
        assert data["author_ids"] == [sample_author.id]
        assert data["translator_ids"] == [sample_translator.id]
        assert data["publisher"]["name"] == "Acme Press"
        assert float(data["price"]) == 19.99

    def test_create_with_names(self, client: TestClient, db_session):
        response = client.post("/books", json=_payload(
            author_names=["Ada", "Bob"],
            translator_names=["Li Hua"],
            publisher_name="New Press",
        ))

        assert response.status_code == 201
        data = response.json()
        assert [a["name"] for a in data["authors"]] == ["Ada", "Bob"]
        assert [t["name"] for t in data["translators"]] == ["Li Hua"]
        assert data["publisher"]["name"] == "New Press"
        assert db_session.query(Author).count() == 3
        assert db_session.query(Publisher).count() == 1

    def test_ids_win_over_names(self, client: TestClient, db_session, sample_author, sample_publisher):
        response = client.post("/books", json=_payload(
            author_ids=[sample_author.id], author_names=["Ignored"],
            publisher_id=sample_publisher.id,
        ))

        assert response.status_code == 201
        assert response.json()["author_ids"] == [sample_author.id]
        assert db_session.query(Author).count() == 1

    def test_missing_authors(self, client: TestClient, sample_publisher):
        response = client.post("/books", json=_payload(publisher_id=sample_publisher.id))
        assert response.status_code == 400

    def test_missing_publisher(self, client: TestClient, sample_author):
        response = client.post("/books", json=_payload(author_ids=[sample_author.id]))
        assert response.status_code == 400

    def test_unknown_author(self, client: TestClient, sample_publisher):
        response = client.post("/books", json=_payload(author_ids=[9999], publisher_id=sample_publisher.id))
        assert response.status_code == 404

    def test_duplicate_isbn(self, client: TestClient, sample_book, sample_author, sample_publisher):
        response = client.post("/books", json=_payload(
            isbn=sample_book.isbn, author_ids=[sample_author.id], publisher_id=sample_publisher.id,
        ))
        assert response.status_code == 409
        assert "already exists" in response.json()["detail"]

    def test_duplicate_publisher_name(self, client: TestClient, sample_book, sample_author):
        response = client.post("/books", json=_payload(
            author_ids=[sample_author.id], publisher_name="Acme Press",
        ))
        assert response.status_code == 409

    def test_author_name_too_long(self, client: TestClient, db_session, sample_publisher):
        response = client.post("/books", json=_payload(
            author_names=["A" * 201], publisher_id=sample_publisher.id,
        ))
        assert response.status_code == 422
        assert db_session.query(Author).count() == 0

    def test_publisher_name_too_long_creates_nothing(self, client: TestClient, db_session):
        response = client.post("/books", json=_payload(
            author_names=["Ok"], publisher_name="P" * 201,
        ))
        assert response.status_code == 422
        assert db_session.query(Author).count() == 0
        assert db_session.query(Publisher).count() == 0

    def test_author_names_without_publisher_creates_nothing(self, client: TestClient, db_session):
        response = client.post("/books", json=_payload(author_names=["Ada"]))
        assert response.status_code == 400
        assert db_session.query(Author).count() == 0

    def test_blank_author_names_without_publisher(self, client: TestClient, db_session):
        response = client.post("/books", json=_payload(author_names=[" "], publisher_name="Acme"))
        assert response.status_code == 400
        assert db_session.query(Publisher).count() == 0

    def test_invalid_body(self, client: TestClient, sample_author, sample_publisher):
        response = client.post("/books", json=_payload(
            title="", author_ids=[sample_author.id], publisher_id=sample_publisher.id,
        ))
        assert response.status_code == 422


class TestReadBook:

    def test_list_books(self, client: TestClient, sample_book):
        response = client.get("/books")
        assert response.status_code == 200
        assert len(response.json()) == 1

    def test_get_book(self, client: TestClient, sample_book, sample_author, sample_translator):
        response = client.get(f"/books/{sample_book.id}")
        assert response.status_code == 200
        data = response.json()
        assert data["authors"] == [{"id": sample_author.id, "name": "Ada Lovelace"}]
        assert data["translators"] == [{"id": sample_translator.id, "name": "Li Hua"}]

    def test_get_book_not_found(self, client: TestClient):
        assert client.get("/books/9999").status_code == 404

    def test_get_by_isbn(self, client: TestClient, sample_book):
        response = client.get(f"/books/isbn/{sample_book.isbn}")
        assert response.status_code == 200
        assert response.json()["id"] == sample_book.id

    def test_get_by_isbn_not_found(self, client: TestClient):
        assert client.get("/books/isbn/none").status_code == 404


class TestUpdateBook:

    def test_update_title(self, client: TestClient, sample_book):
        response = client.put(f"/books/{sample_book.id}", json={"title": "New"})
        assert response.status_code == 200
        assert response.json()["title"] == "New"

    def test_replace_authors(self, client: TestClient, sample_book, sample_author_2):
        response = client.put(f"/books/{sample_book.id}", json={"author_ids": [sample_author_2.id]})
        assert response.status_code == 200
        assert response.json()["author_ids"] == [sample_author_2.id]

    def test_replace_authors_by_name(self, client: TestClient, sample_book):
        response = client.put(f"/books/{sample_book.id}", json={"author_names": ["Grace"]})
        assert response.status_code == 200
        assert [a["name"] for a in response.json()["authors"]] == ["Grace"]

    def test_replace_translators_by_name(self, client: TestClient, db_session, sample_book, sample_translator):
        response = client.put(f"/books/{sample_book.id}", json={"translator_names": ["Wang Wei", "Zhao Lei"]})
        assert response.status_code == 200
        data = response.json()
        assert [t["name"] for t in data["translators"]] == ["Wang Wei", "Zhao Lei"]
        assert sample_translator.id not in data["translator_ids"]
        assert db_session.query(Author).filter(Author.name == sample_translator.name).count() == 1

    def test_translator_name_too_long(self, client: TestClient, db_session, sample_book):
        before = db_session.query(Author).count()
        response = client.put(f"/books/{sample_book.id}", json={"translator_names": ["T" * 201]})
        assert response.status_code == 422
        assert db_session.query(Author).count() == before

    def test_blank_fields_dropped(self, client: TestClient, sample_book):
        response = client.put(f"/books/{sample_book.id}", json={
            "title": "  ", "price": 0, "edition": "2nd", "author_ids": [],
        })
        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Notes on the Analytical Engine"
        assert data["edition"] == "2nd"
        assert float(data["price"]) == 19.99

    def test_no_effective_fields(self, client: TestClient, sample_book):
        response = client.put(f"/books/{sample_book.id}", json={"title": "", "publisher_id": 0})
        assert response.status_code == 400

    def test_update_not_found(self, client: TestClient):
        assert client.put("/books/9999", json={"title": "X"}).status_code == 404

    def test_isbn_collision(self, client: TestClient, sample_book, sample_author, sample_publisher):
        other = client.post("/books", json=_payload(
            isbn="OTHER", author_ids=[sample_author.id], publisher_id=sample_publisher.id,
        )).json()
        response = client.put(f"/books/{other['id']}", json={"isbn": sample_book.isbn})
        assert response.status_code == 409


class TestDeleteBook:

    def test_delete_book(self, client: TestClient, sample_book):
        response = client.delete(f"/books/{sample_book.id}")
        assert response.status_code == 204
        assert client.get(f"/books/{sample_book.id}").status_code == 404

    def test_delete_not_found(self, client: TestClient):
        assert client.delete("/books/9999").status_code == 404
