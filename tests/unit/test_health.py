# ABOUTME: Unit tests for completeness scoring and library health analysis.
# ABOUTME: Validates field weights, rounding, the 99% clamp, issue buckets, and rating bands.

import pytest

from libris.library.health import (
    HEALTH_FIELDS,
    TOTAL_WEIGHT,
    HealthReport,
    IssueType,
    analyze_library,
    book_completeness,
    books_with_issues,
    completeness_rating,
    has_field_value,
    library_completeness,
    missing_fields,
    round_half_up,
)
from libris.library.types import Book


def _complete(book_id: str = "full", **overrides) -> Book:
    fields = {
        "cover_image_url": "https://covers.example/x.jpg",
        "genres": ["g1"],
        "page_count": 320,
        "physical_format": "Hardcover",
        "publisher": "Tor",
        "published_date": "2019-05-01",
        "isbn": "9780765326355",
    }
    fields.update(overrides)
    return Book(id=book_id, title="Title", author="Author", **fields)


def _bare(book_id: str = "bare", **fields) -> Book:
    return Book(id=book_id, title="Title", author="Author", **fields)


class TestHealthFields:
    def test_weights(self) -> None:
        weights = {name: f.weight for name, f in HEALTH_FIELDS.items()}
        assert weights == {
            "cover_image_url": 2,
            "genres": 2,
            "page_count": 1,
            "physical_format": 1,
            "publisher": 1,
            "published_date": 1,
            "isbn": 0,
        }
        assert TOTAL_WEIGHT == 8


class TestHasFieldValue:
    def test_missing_and_empty(self) -> None:
        book = _bare(publisher="", page_count=0)
        assert has_field_value(book, "publisher") is False
        assert has_field_value(book, "page_count") is False
        assert has_field_value(book, "cover_image_url") is False

    def test_present(self) -> None:
        assert has_field_value(_bare(publisher="Tor"), "publisher") is True

    def test_genres_need_at_least_one(self) -> None:
        assert has_field_value(_bare(genres=[]), "genres") is False
        assert has_field_value(_bare(genres=["g1"]), "genres") is True

    def test_missing_fields_in_display_order(self) -> None:
        book = _bare(genres=["g1"], publisher="Tor")
        assert missing_fields(book) == [
            "cover_image_url",
            "page_count",
            "physical_format",
            "published_date",
            "isbn",
        ]
        assert missing_fields(_complete()) == []


class TestBookCompleteness:
    def test_page_count_only_is_13(self) -> None:
        assert book_completeness(_bare(page_count=100)) == 13

    def test_cover_and_genres_is_50(self) -> None:
        assert book_completeness(_bare(cover_image_url="x", genres=["g1"])) == 50

    def test_complete_is_100(self) -> None:
        assert book_completeness(_complete()) == 100

    def test_nothing_is_0(self) -> None:
        assert book_completeness(_bare()) == 0

    def test_isbn_does_not_count(self) -> None:
        assert book_completeness(_bare(isbn="9780765326355")) == 0
        assert book_completeness(_complete(isbn=None)) == 100

    def test_seven_eighths_rounds_up(self) -> None:
        assert book_completeness(_complete(publisher=None)) == 88

    def test_round_half_up(self) -> None:
        assert round_half_up(12.5) == 13
        assert round_half_up(93.5) == 94
        assert round_half_up(12.49) == 12


class TestLibraryCompleteness:
    def test_empty_is_100(self) -> None:
        assert library_completeness([]) == 100
        assert library_completeness(None) == 100

    def test_all_complete_is_100(self) -> None:
        assert library_completeness([_complete("a"), _complete("b")]) == 100

    def test_mean_of_book_scores(self) -> None:
        """100 and 88 average to 94; the clamp does not apply."""
        assert library_completeness([_complete("a"), _complete("b", publisher=None)]) == 94

    def test_clamped_to_99_when_any_book_incomplete(self) -> None:
        books = [_complete(str(i)) for i in range(99)]
        books.append(_complete("gap", publisher=None))
        # Mean is 99.88, which rounds to 100
        assert library_completeness(books) == 99

    def test_low_scores(self) -> None:
        assert library_completeness([_bare("a"), _bare("b", page_count=10)]) == 7

    def test_deleted_books_ignored(self) -> None:
        books = [_complete("a"), _bare("binned", deleted_at=1)]
        assert library_completeness(books) == 100

    def test_only_deleted_books_is_100(self) -> None:
        assert library_completeness([_bare("binned", deleted_at=1)]) == 100


class TestAnalyzeLibrary:
    def test_empty_report(self) -> None:
        report = analyze_library([])
        assert report.total_books == 0
        assert report.completeness_score == 100
        assert report.total_issues == 0
        assert report.fixable_books == 0
        assert set(report.issues) == set(IssueType)

    def test_excludes_deleted_books(self) -> None:
        report = analyze_library([_complete("a"), _bare("binned", deleted_at=123)])
        assert report.total_books == 1
        assert report.completeness_score == 100
        assert report.issues[IssueType.MISSING_COVER] == []

    def test_buckets_missing_fields(self) -> None:
        bare = _bare("bare", genres=["g1"])
        report = analyze_library([_complete("full"), bare])
        assert report.issues[IssueType.MISSING_COVER] == [bare]
        assert report.issues[IssueType.MISSING_GENRES] == []
        assert report.issues[IssueType.MISSING_ISBN] == [bare]

    def test_total_issues_excludes_isbn(self) -> None:
        report = analyze_library([_bare("a"), _complete("b", isbn=None)])
        # Six weighted issues on "a"; missing ISBNs are tracked but not counted
        assert report.total_issues == 6
        assert len(report.issues[IssueType.MISSING_ISBN]) == 2

    def test_fixable_books_need_isbn_and_weighted_gap(self) -> None:
        books = [
            _bare("fixable", isbn="9780765326355"),
            _bare("no-isbn"),
            _complete("complete"),
            _complete("only-isbn-missing", isbn=None),
        ]
        assert analyze_library(books).fixable_books == 1


class TestCompletenessRating:
    @pytest.mark.parametrize(
        ("score", "label", "colour"),
        [
            (100, "Excellent", "green"),
            (90, "Excellent", "green"),
            (89, "Good", "green"),
            (70, "Good", "green"),
            (69, "Fair", "amber"),
            (50, "Fair", "amber"),
            (49, "Needs Attention", "red"),
            (0, "Needs Attention", "red"),
        ],
    )
    def test_bands(self, score: int, label: str, colour: str) -> None:
        rating = completeness_rating(score)
        assert (rating.label, rating.colour) == (label, colour)


class TestBooksWithIssues:
    def test_no_issues(self) -> None:
        assert books_with_issues(HealthReport()) == []

    def test_grouped_and_sorted_by_issue_count(self) -> None:
        few = _complete("few", publisher=None)
        many = _bare("many", isbn="9780765326355")
        report = analyze_library([few, many])
        entries = books_with_issues(report)
        assert [e.book.id for e in entries] == ["many", "few"]
        assert entries[0].missing == ["Cover", "Genres", "Pages", "Format", "Publisher", "Date"]
        assert entries[1].missing == ["Publisher"]
