# ABOUTME: Shared pytest fixtures for Libris tests.
# ABOUTME: Provides a sample collection with catalogs and a JSON snapshot file of it.

import json
from pathlib import Path

import pytest

from libris.library.types import Book, Genre, ReadingSession, Series


@pytest.fixture
def genres() -> list[Genre]:
    return [
        Genre(id="g-fantasy", name="Fantasy", color="#22c55e"),
        Genre(id="g-mystery", name="Mystery", color="#3b82f6"),
        Genre(id="g-scifi", name="Science Fiction", color="#a855f7"),
    ]


@pytest.fixture
def series() -> list[Series]:
    return [
        Series(id="s-lotr", name="The Lord of the Rings"),
        Series(id="s-dune", name="Dune"),
    ]


@pytest.fixture
def sample_books() -> list[Book]:
    """A small collection covering every status, rating gaps, and a binned book."""
    return [
        Book(
            id="hobbit",
            title="The Hobbit",
            author="J.R.R. Tolkien",
            isbn="9780261103344",
            rating=5,
            genres=["g-fantasy"],
            reads=[ReadingSession(started_at=1_600_000_000_000, finished_at=1_601_000_000_000)],
            created_at=1_700_000_000_000,
        ),
        Book(
            id="fellowship",
            title="The Fellowship of the Ring",
            author="J.R.R. Tolkien",
            rating=4,
            genres=["g-fantasy"],
            series_id="s-lotr",
            series_position=1,
            reads=[ReadingSession(started_at=1_650_000_000_000)],
            created_at=1_700_000_100_000,
        ),
        Book(
            id="dune",
            title="Dune",
            author="Frank Herbert",
            rating=3,
            genres=["g-scifi"],
            series_id="s-dune",
            series_position=1,
            created_at="2023-11-20T10:00:00+00:00",
        ),
        Book(
            id="poirot",
            title="Murder on the Orient Express",
            author="Agatha Christie",
            genres=["g-mystery"],
            reads=[
                ReadingSession(started_at="2020-01-01", finished_at="2020-01-09"),
                ReadingSession(started_at="2024-03-01"),
            ],
        ),
        Book(
            id="binned",
            title="Old Paperback",
            author="Somebody",
            rating=1,
            deleted_at=1_710_000_000_000,
        ),
    ]


@pytest.fixture
def snapshot_file(tmp_path: Path) -> Path:
    """Write a JSON collection snapshot in the store's export format."""
    data = {
        "books": [
            {
                "id": "hobbit",
                "title": "The Hobbit",
                "author": "J.R.R. Tolkien",
                "isbn": "9780261103344",
                "coverImageUrl": "https://covers.example/hobbit.jpg",
                "publisher": "HarperCollins",
                "publishedDate": "1937",
                "physicalFormat": "Paperback",
                "pageCount": 310,
                "rating": 5,
                "genres": ["g-fantasy"],
                "reads": [{"startedAt": 1600000000000, "finishedAt": 1601000000000}],
                "createdAt": 1700000000000,
            },
            {
                "id": "fellowship",
                "title": "The Fellowship of the Ring",
                "author": "J.R.R. Tolkien",
                "isbn": "9780261102354",
                "rating": 4,
                "genres": ["g-fantasy"],
                "seriesId": "s-lotr",
                "seriesPosition": 1,
                "reads": [{"startedAt": 1650000000000, "finishedAt": None}],
                "createdAt": 1700000100000,
            },
            {
                "id": "dune",
                "title": "Dune",
                "author": "Frank Herbert",
                "rating": 3,
                "genres": ["g-scifi"],
                "seriesId": "s-dune",
                "seriesPosition": 1,
                "createdAt": "2023-11-20T10:00:00+00:00",
            },
            {
                "id": "binned",
                "title": "Forgotten",
                "author": "Somebody",
                "deletedAt": 1710000000000,
            },
        ],
        "genres": [
            {"id": "g-fantasy", "name": "Fantasy", "color": "#22c55e"},
            {"id": "g-mystery", "name": "Mystery", "color": "#3b82f6"},
            {"id": "g-scifi", "name": "Science Fiction", "color": "#a855f7"},
        ],
        "series": [
            {"id": "s-lotr", "name": "The Lord of the Rings"},
            {"id": "s-dune", "name": "Dune"},
        ],
    }
    path = tmp_path / "collection.json"
    path.write_text(json.dumps(data))
    return path
