from library_tracker.models.book import Book
from library_tracker.models.borrow_record import BorrowRecord
from library_tracker.models.category import Category
from library_tracker.models.current_borrow import CurrentBorrow


def _payload(category_id, **overrides):
    data = {
        "title": "The Left Hand of Darkness",
        "author": "Ursula K. Le Guin",
        "price": "12.50",
        "stock": "4",
        "bookCategoryId": str(category_id),
    }
    data.update(overrides)
    return data


def test_create_book_trims_and_embeds_category(client, category):
    resp = client.post("/books", json=_payload(category.id, title="  Solaris  "))

    assert resp.status_code == 201
    body = resp.get_json()
    assert body["title"] == "Solaris"
    assert body["price"] == 12.5
    assert body["stock"] == 4
    assert body["bookCategoryId"] == category.id
    assert body["category"]["name"] == "Fiction"


def test_create_book_validation_errors(client, category):
    cases = [
        (_payload(category.id, title="   "), "title is required"),
        (_payload(category.id, author=None), "author is required"),
        (_payload(category.id, price="cheap"), "price must be a number"),
        (_payload(category.id, price=-1), "price cannot be negative"),
        (_payload(category.id, stock="many"), "stock must be an integer"),
        (_payload(category.id, stock=-3), "stock cannot be negative"),
        (_payload(category.id, bookCategoryId=None), "bookCategoryId is required"),
        (_payload(999), "Category not found"),
    ]
    for payload, message in cases:
        resp = client.post("/books", json=payload)
        assert resp.status_code == 400, payload
        assert resp.get_json() == {"error": message}


def test_create_book_rejects_non_object_body(client):
    resp = client.post("/books", json=["not", "an", "object"])
    assert resp.status_code == 400
    assert "error" in resp.get_json()


def test_get_book_and_missing_book(client, make_book):
    book = make_book()
    assert client.get(f"/books/{book.id}").get_json()["title"] == "Dune"

    resp = client.get("/books/999")
    assert resp.status_code == 404
    assert resp.get_json() == {"error": "Book not found"}


def test_update_book_replaces_fields(client, session, make_book):
    book = make_book()
    science = Category(name="Science")
    session.add(science)
    session.commit()

    resp = client.put(
        f"/books/{book.id}",
        json=_payload(science.id, title="Dune Messiah", stock=7, price=3),
    )

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["title"] == "Dune Messiah"
    assert body["stock"] == 7
    assert body["price"] == 3.0
    assert body["category"]["name"] == "Science"


def test_update_missing_book_is_404(client, category):
    resp = client.put("/books/999", json=_payload(category.id))
    assert resp.status_code == 404


def test_update_book_with_unknown_category_is_rejected(client, make_book):
    book = make_book()
    resp = client.put(f"/books/{book.id}", json=_payload(424242))
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Category not found"}


def test_list_books_filters_by_category_and_search(client, session, category, make_book):
    history = Category(name="History")
    session.add(history)
    session.commit()

    make_book(title="Dune", author="Frank Herbert")
    make_book(title="Emma", author="Jane Austen")
    make_book(title="SPQR", author="Mary Beard", category_id=history.id)

    titles = [b["title"] for b in client.get("/books").get_json()]
    assert titles == ["SPQR", "Emma", "Dune"]

    resp = client.get(f"/books?categoryId={history.id}")
    assert [b["title"] for b in resp.get_json()] == ["SPQR"]

    resp = client.get("/books?search=AUSTEN")
    assert [b["title"] for b in resp.get_json()] == ["Emma"]

    resp = client.get("/books?search=un")
    assert [b["title"] for b in resp.get_json()] == ["Dune"]

    resp = client.get(f"/books?categoryId={category.id}&search=mary")
    assert resp.get_json() == []


def test_search_matches_wildcards_literally(client, make_book):
    make_book(title="100% Pure", author="Someone")
    make_book(title="Plain", author="Nobody")

    resp = client.get("/books", query_string={"search": "%"})
    assert [b["title"] for b in resp.get_json()] == ["100% Pure"]


def test_list_books_rejects_bad_category_filter(client):
    resp = client.get("/books?categoryId=abc")
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "categoryId must be an integer"}


def test_delete_book_cascades_history(client, session, reader, make_book):
    book = make_book(stock=3)
    client.post("/borrow", json={"userId": reader.id, "bookId": book.id, "quantity": 1})
    client.post("/return", json={"userId": reader.id, "bookId": book.id, "quantity": 1})
    assert session.query(BorrowRecord).count() == 2

    resp = client.delete(f"/books/{book.id}")

    assert resp.status_code == 200
    assert resp.get_json() == {"message": "Book deleted successfully"}
    assert session.query(BorrowRecord).count() == 0
    assert session.query(Book).count() == 0


def test_delete_borrowed_book_is_blocked(client, session, reader, make_book):
    book = make_book(stock=3)
    client.post("/borrow", json={"userId": reader.id, "bookId": book.id, "quantity": 2})

    resp = client.delete(f"/books/{book.id}")

    assert resp.status_code == 400
    assert "currently borrowed" in resp.get_json()["error"]
    assert session.get(Book, book.id).stock == 1
    assert session.query(BorrowRecord).count() == 1
    assert session.query(CurrentBorrow).count() == 1


def test_delete_missing_book_is_404(client):
    assert client.delete("/books/999").status_code == 404


def test_book_crud_never_touches_categories(client, session, category):
    before = session.query(Category).count()

    created = client.post("/books", json=_payload(category.id)).get_json()
    client.put(f"/books/{created['id']}", json=_payload(category.id, title="Renamed"))
    client.delete(f"/books/{created['id']}")

    assert session.query(Category).count() == before
    assert client.delete(f"/categories/{category.id}").status_code == 405


def test_oversized_numbers_are_client_errors(client, session, category):
    cases = [
        (_payload(category.id, stock=10 ** 20), "stock is out of range"),
        (_payload(category.id, price="1e30"), "price cannot exceed 99999999.99"),
        (_payload(category.id, price=123456789), "price cannot exceed 99999999.99"),
        (_payload(10 ** 20), "bookCategoryId is out of range"),
    ]
    for payload, message in cases:
        resp = client.post("/books", json=payload)
        assert resp.status_code == 400, payload
        assert resp.get_json() == {"error": message}
    assert session.query(Book).count() == 0


def test_oversized_category_filter_is_rejected(client):
    resp = client.get("/books?categoryId=99999999999999999999")
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "categoryId is out of range"}
