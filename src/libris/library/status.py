# ABOUTME: Derives a book's reading status from its ordered reading sessions.
# ABOUTME: Only the last session is authoritative; history is never rewritten.

from libris.library.types import Book, ReadingStatus

STATUS_LABELS: dict[ReadingStatus, str] = {
    ReadingStatus.WANT_TO_READ: "Not Read",
    ReadingStatus.READING: "Currently Reading",
    ReadingStatus.FINISHED: "Finished",
}

# Statuses offered as filter options. "Not Read" is the default state and
# is not offered.
STATUS_OPTIONS: tuple[ReadingStatus, ...] = (ReadingStatus.READING, ReadingStatus.FINISHED)


def derive_status(book: Book) -> ReadingStatus:
    """Compute the reading status of a book.

    No sessions means the book has not been started. Otherwise the last
    session decides: a finish date wins, then a start date. Starting a
    re-read appends a new open session, so an earlier finish is ignored.
    """
    reads = book.reads or []
    if not reads:
        return ReadingStatus.WANT_TO_READ

    latest = reads[-1]
    if latest.finished_at:
        return ReadingStatus.FINISHED
    if latest.started_at:
        return ReadingStatus.READING
    return ReadingStatus.WANT_TO_READ
