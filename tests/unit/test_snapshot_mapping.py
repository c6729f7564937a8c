# ABOUTME: Unit tests for snapshot record to Book mapping.
# ABOUTME: Validates camelCase keys, missing and malformed values, and record skipping.

import logging
from typing import Any

from libris.collection.mapping import (
    book_from_dict,
    book_to_dict,
    genre_from_dict,
    records_to_books,
    session_from_dict,
)
from libris.library.filters import filter_books
from libris.library.sorting import sort_books
from libris.library.types import Book, BookFilters, ReadingSession


class TestBookFromDict:
    def test_maps_camel_case_fields(self) -> None:
        book = book_from_dict(
            {
                "id": "b1",
                "title": "Dune",
                "author": "Frank Herbert",
                "coverImageUrl": "https://covers.example/dune.jpg",
                "pageCount": 412,
                "physicalFormat": "Paperback",
                "publishedDate": "1965",
                "seriesId": "s-dune",
                "seriesPosition": 1,
                "genres": ["g-scifi"],
                "reads": [{"startedAt": 1, "finishedAt": 2}],
                "createdAt": 1700000000000,
                "deletedAt": None,
            }
        )
        assert book.cover_image_url == "https://covers.example/dune.jpg"
        assert book.page_count == 412
        assert book.physical_format == "Paperback"
        assert book.published_date == "1965"
        assert book.series_id == "s-dune"
        assert book.series_position == 1
        assert book.genres == ["g-scifi"]
        assert book.reads == [ReadingSession(started_at=1, finished_at=2)]
        assert book.created_at == 1700000000000
        assert book.is_deleted is False

    def test_missing_fields_are_absent(self) -> None:
        book = book_from_dict({"id": "b2"})
        assert book == Book(id="b2", title="", author="")

    def test_unknown_keys_ignored(self) -> None:
        book = book_from_dict({"id": "b3", "title": "T", "author": "A", "images": [1, 2]})
        assert book.title == "T"

    def test_malformed_lists_become_empty(self) -> None:
        book = book_from_dict({"id": "b4", "title": "T", "author": "A", "genres": "g1", "reads": 5})
        assert book.genres == []
        assert book.reads == []

    def test_non_mapping_session_is_empty(self) -> None:
        assert session_from_dict(None) == ReadingSession()

    def test_deleted_marker(self) -> None:
        assert book_from_dict({"id": "b5", "deletedAt": 1710000000000}).is_deleted is True


class TestBookFromDictCoercion:
    """Mistyped values are converted or dropped at the mapping boundary."""

    def test_numeric_strings_become_numbers(self) -> None:
        book = book_from_dict(
            {"id": "b1", "rating": "5", "pageCount": "310", "seriesPosition": "1.5"}
        )
        assert book.rating == 5
        assert book.page_count == 310
        assert book.series_position == 1.5

    def test_whole_floats_become_ints(self) -> None:
        book = book_from_dict({"id": "b1", "rating": 4.0, "seriesPosition": 2.0})
        assert book.rating == 4
        assert isinstance(book.rating, int)
        assert book.series_position == 2

    def test_invalid_numbers_are_absent(self, caplog: Any) -> None:
        with caplog.at_level(logging.WARNING):
            book = book_from_dict(
                {"id": "b1", "rating": "great", "pageCount": [300], "seriesPosition": True}
            )
        assert book.rating is None
        assert book.page_count is None
        assert book.series_position is None
        assert any("rating" in r.message and "b1" in r.message for r in caplog.records)

    def test_fractional_rating_is_absent(self) -> None:
        assert book_from_dict({"id": "b1", "rating": 3.5}).rating is None

    def test_non_finite_numbers_are_absent(self) -> None:
        book = book_from_dict({"id": "b1", "pageCount": float("nan"), "rating": "inf"})
        assert book.page_count is None
        assert book.rating is None

    def test_text_fields_are_stringified(self) -> None:
        book = book_from_dict(
            {"id": 7, "title": 1984, "author": 42, "isbn": 9780123456789, "publisher": 5}
        )
        assert book.id == "7"
        assert book.title == "1984"
        assert book.author == "42"
        assert book.isbn == "9780123456789"
        assert book.publisher == "5"

    def test_coerced_books_work_with_the_engine(self) -> None:
        books = [
            book_from_dict({"id": "a", "title": "A", "author": 42, "rating": "5"}),
            book_from_dict({"id": "b", "title": "B", "author": "Someone", "rating": 3}),
            book_from_dict({"id": "c", "title": "C", "author": "Someone", "rating": "n/a"}),
        ]
        assert [b.id for b in filter_books(books, BookFilters(min_rating=4))] == ["a"]
        assert [b.id for b in filter_books(books, BookFilters(search="42"))] == ["a"]
        assert [b.id for b in sort_books(books, "rating", "desc")] == ["a", "b", "c"]


class TestBookToDict:
    def test_omits_absent_optional_fields(self) -> None:
        record = book_to_dict(Book(id="b1", title="T", author="A", rating=4))
        assert record == {
            "id": "b1",
            "title": "T",
            "author": "A",
            "genres": [],
            "reads": [],
            "rating": 4,
        }

    def test_reads_use_camel_case(self) -> None:
        book = Book(id="b1", title="T", author="A", reads=[ReadingSession(started_at=5)])
        assert book_to_dict(book)["reads"] == [{"startedAt": 5, "finishedAt": None}]


class TestCatalogMapping:
    def test_genre_default_colour(self) -> None:
        genre = genre_from_dict({"id": "g1", "name": "Horror"})
        assert genre.color == "#6b7280"

    def test_records_to_books_skips_non_objects(self) -> None:
        books = records_to_books([{"id": "ok", "title": "T", "author": "A"}, "junk", 42])
        assert [b.id for b in books] == ["ok"]
