"""End-to-end tests for the database-backed API."""

from datetime import datetime

from fastapi.testclient import TestClient

MISSING_ID = "f" * 32


class TestAuthorsApi:
    def test_author_crud(self, database_client: TestClient, author_payload):
        created = database_client.post("/authors", json=author_payload)
        assert created.status_code == 201
        author = created.json()
        assert author["name"] == "Frank Herbert"
        assert len(author["id"]) == 32
        assert "createdAt" in author

        fetched = database_client.get(f"/authors/{author['id']}")
        assert fetched.status_code == 200
        assert fetched.json()["biography"] == author_payload["biography"]

        updated = database_client.put(
            f"/authors/{author['id']}", json={"name": "Franklin Herbert"}
        )
        assert updated.status_code == 200
        assert updated.json()["name"] == "Franklin Herbert"
        assert updated.json()["biography"] == author_payload["biography"]

        deleted = database_client.delete(f"/authors/{author['id']}")
        assert deleted.status_code == 200
        assert deleted.json() == {"message": "Author deleted successfully"}

        missing = database_client.get(f"/authors/{author['id']}")
        assert missing.status_code == 404
        assert missing.json() == {"error": "Author not found"}

    def test_author_name_too_short(self, database_client: TestClient):
        response = database_client.post(
            "/authors", json={"name": "Al", "biography": "Short name."}
        )

        assert response.status_code == 400
        assert '"name"' in response.json()["error"]

    def test_list_sets_total_header(self, database_client: TestClient):
        for index in range(3):
            database_client.post(
                "/authors", json={"name": f"Author {index}", "biography": "..."}
            )

        response = database_client.get("/authors", params={"limit": 2})

        assert response.status_code == 200
        assert len(response.json()) == 2
        assert response.headers["X-Total-Count"] == "3"

    def test_list_filters_by_name(self, database_client: TestClient, author_payload):
        database_client.post("/authors", json=author_payload)
        database_client.post(
            "/authors", json={"name": "Isaac Asimov", "biography": "Foundation."}
        )

        response = database_client.get("/authors", params={"name": "asimov"})

        assert [a["name"] for a in response.json()] == ["Isaac Asimov"]
        assert response.headers["X-Total-Count"] == "1"


class TestCategoriesApi:
    def test_category_crud(self, database_client: TestClient, category_payload):
        category = database_client.post("/categories", json=category_payload).json()

        response = database_client.put(
            f"/categories/{category['id']}", json={"description": "Updated."}
        )
        assert response.status_code == 200
        assert response.json()["name"] == category_payload["name"]

        response = database_client.delete(f"/categories/{category['id']}")
        assert response.json() == {"message": "Category deleted successfully"}

    def test_description_required(self, database_client: TestClient):
        response = database_client.post("/categories", json={"name": "Drama"})

        assert response.status_code == 400
        assert response.json() == {"error": '"description" is required'}


class TestBooksApi:
    def test_book_lifecycle(self, database_client: TestClient, book_payload_factory):
        payload = book_payload_factory()

        created = database_client.post("/books", json=payload)
        assert created.status_code == 201
        book = created.json()
        assert book["title"] == "Dune"
        assert book["publicationYear"] == 1965
        assert book["author"]["id"] == payload["author"]
        assert book["author"]["name"] == "Frank Herbert"
        assert book["category"]["id"] == payload["category"]

        fetched = database_client.get(f"/books/{book['id']}")
        assert fetched.status_code == 200
        assert fetched.json()["title"] == "Dune"
        assert fetched.json()["author"]["name"] == "Frank Herbert"

        updated = database_client.put(
            f"/books/{book['id']}", json={"publicationYear": 1966}
        )
        assert updated.status_code == 200
        assert updated.json()["publicationYear"] == 1966
        assert updated.json()["title"] == "Dune"

        deleted = database_client.delete(f"/books/{book['id']}")
        assert deleted.status_code == 200
        assert deleted.json() == {"message": "Book deleted successfully"}

        assert database_client.get(f"/books/{book['id']}").status_code == 404

    def test_future_year_is_rejected(
        self, database_client: TestClient, book_payload_factory
    ):
        response = database_client.post(
            "/books", json=book_payload_factory(publicationYear=3000)
        )

        assert response.status_code == 400
        assert "publicationYear" in response.json()["error"]
        assert str(datetime.now().year) in response.json()["error"]

    def test_unknown_author_is_rejected(
        self, database_client: TestClient, book_payload_factory
    ):
        response = database_client.post(
            "/books", json=book_payload_factory(author=MISSING_ID)
        )

        assert response.status_code == 400
        assert response.json() == {"error": '"author" references an unknown author'}

    def test_unknown_field_is_rejected(
        self, database_client: TestClient, book_payload_factory
    ):
        response = database_client.post(
            "/books", json=book_payload_factory(isbn="9780441013593")
        )

        assert response.status_code == 400
        assert response.json() == {"error": '"isbn" is not allowed'}

    def test_empty_update_is_rejected(
        self, database_client: TestClient, book_payload_factory
    ):
        book = database_client.post("/books", json=book_payload_factory()).json()

        response = database_client.put(f"/books/{book['id']}", json={})

        assert response.status_code == 400
        assert response.json() == {"error": '"value" must contain at least one field'}

    def test_invalid_json_body(self, database_client: TestClient):
        response = database_client.post(
            "/books",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid JSON payload"}

    def test_missing_body(self, database_client: TestClient):
        response = database_client.post("/books")

        assert response.status_code == 400
        assert response.json() == {"error": '"value" must be of type object'}

    def test_invalid_id_is_bad_request(self, database_client: TestClient):
        response = database_client.get("/books/not-a-valid-id")

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid ID"}

    def test_invalid_id_checked_before_payload(self, database_client: TestClient):
        response = database_client.put("/books/not-a-valid-id", json={})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid ID"}

    def test_missing_book(self, database_client: TestClient):
        for method in ("get", "delete"):
            response = getattr(database_client, method)(f"/books/{MISSING_ID}")
            assert response.status_code == 404
            assert response.json() == {"error": "Book not found"}

        response = database_client.put(f"/books/{MISSING_ID}", json={"title": "Dune"})
        assert response.status_code == 404

    def test_deleted_author_reads_as_null(
        self, database_client: TestClient, book_payload_factory
    ):
        payload = book_payload_factory()
        book = database_client.post("/books", json=payload).json()

        database_client.delete(f"/authors/{payload['author']}")

        fetched = database_client.get(f"/books/{book['id']}")
        assert fetched.status_code == 200
        assert fetched.json()["author"] is None
        assert fetched.json()["category"]["id"] == payload["category"]

    def test_list_books(self, database_client: TestClient, book_payload_factory):
        for title in ("Dune", "Dune Messiah", "Children of Dune"):
            database_client.post("/books", json=book_payload_factory(title=title))

        response = database_client.get("/books", params={"title": "messiah"})
        assert response.status_code == 200
        assert [b["title"] for b in response.json()] == ["Dune Messiah"]
        assert response.headers["X-Total-Count"] == "1"

        response = database_client.get("/books", params={"page": 2, "limit": 2})
        assert len(response.json()) == 1
        assert response.headers["X-Total-Count"] == "3"

    def test_page_past_the_end_is_empty(
        self, database_client: TestClient, book_payload_factory
    ):
        database_client.post("/books", json=book_payload_factory())

        for path in ("/books", "/authors", "/categories"):
            response = database_client.get(
                path, params={"page": "100000000000000000000"}
            )
            assert response.status_code == 200, path
            assert response.json() == []
            assert response.headers["X-Total-Count"] == "1"

    def test_default_page_size(self, database_client: TestClient):
        """Without page or limit, lists return the configured default page size."""
        for index in range(12):
            database_client.post(
                "/authors", json={"name": f"Author {index}", "biography": "..."}
            )

        response = database_client.get("/authors")

        assert len(response.json()) == 10
        assert response.headers["X-Total-Count"] == "12"

    def test_invalid_pagination(self, database_client: TestClient):
        response = database_client.get("/books", params={"limit": 1000})
        assert response.status_code == 400
        assert '"limit"' in response.json()["error"]

        response = database_client.get("/books", params={"page": "first"})
        assert response.status_code == 400
        assert response.json() == {"error": '"page" must be a number'}


class TestApplication:
    def test_unknown_route(self, database_client: TestClient):
        response = database_client.get("/nonexistent-path")

        assert response.status_code == 404
        assert response.json() == {"error": "Route not found"}

    def test_method_not_allowed_uses_error_shape(self, database_client: TestClient):
        response = database_client.patch("/books")

        assert response.status_code == 405
        assert "error" in response.json()

    def test_request_id_is_echoed(self, database_client: TestClient):
        response = database_client.get("/health", headers={"X-Request-ID": "abc-123"})

        assert response.headers["X-Request-ID"] == "abc-123"

    def test_cors_exposes_list_headers(self, database_client: TestClient):
        response = database_client.get(
            "/authors", headers={"Origin": "http://localhost:3000"}
        )

        exposed = response.headers["Access-Control-Expose-Headers"].lower()
        assert "x-total-count" in exposed
        assert "x-request-id" in exposed

    def test_security_headers(self, database_client: TestClient):
        response = database_client.get("/health")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"

    def test_health(self, database_client: TestClient):
        assert database_client.get("/health").json() == {
            "status": "healthy",
            "service": "catalog",
        }

    def test_readiness_checks_database(self, database_client: TestClient):
        response = database_client.get("/health/ready")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ready"
        assert body["store_backend"] == "database"
        assert body["checks"]["database"]["status"] == "healthy"

    def test_openapi_document(self, database_client: TestClient):
        document = database_client.get("/openapi.json").json()

        assert document["info"]["title"] == "Book Management API"
        assert {"/books", "/books/{item_id}", "/authors", "/categories"} <= set(
            document["paths"]
        )
        body = document["paths"]["/books"]["post"]["requestBody"]
        schema = body["content"]["application/json"]["schema"]
        assert schema["required"] == ["title", "author", "category", "publicationYear"]
        assert {tag["name"] for tag in document["tags"]} == {
            "Books",
            "Authors",
            "Categories",
        }

    def test_docs_served(self, database_client: TestClient):
        response = database_client.get("/api-docs")

        assert response.status_code == 200
        assert "swagger" in response.text.lower()
