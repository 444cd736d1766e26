"""
Whole-document file storage.

Opens and saves one portfolio document and tracks unsaved changes by
comparing the current serialization with the last saved one.
"""

from pathlib import Path

from loguru import logger

from portfolio_tracker.core.constants import DOCUMENT_ENCODING, DOCUMENT_SUFFIX
from portfolio_tracker.core.exceptions.portfolio import DataError
from portfolio_tracker.core.models import Portfolio
from portfolio_tracker.infrastructure.serialization import (
    deserialize_portfolio,
    serialize_portfolio,
)


class DocumentStore:
    """Holds the open portfolio and the file it belongs to."""

    def __init__(self, portfolio: Portfolio, path: Path | None = None) -> None:
        self.portfolio = portfolio
        self.path = path
        self._saved_text = serialize_portfolio(portfolio)
        if path is not None:
            self.portfolio.docroot = str(path.parent)

    @classmethod
    def open(cls, path: Path | str) -> "DocumentStore":
        """Read and deserialize a document file.

        Raises:
            DataError: If the file cannot be read
            DocumentFormatError: If the content is not a portfolio document
        """
        path = Path(path)
        try:
            text = path.read_text(encoding=DOCUMENT_ENCODING)
        except OSError as e:
            logger.error(f"Failed to read portfolio document {path}: {e}")
            raise DataError(f"Failed to read portfolio document: {path.name}") from e

        store = cls(deserialize_portfolio(text), path)
        logger.info(f"Opened portfolio {store.portfolio.name!r} from {path}")
        return store

    def is_dirty(self) -> bool:
        """True if the portfolio changed since it was opened or last saved."""
        return serialize_portfolio(self.portfolio) != self._saved_text

    def mark_clean(self) -> None:
        self._saved_text = serialize_portfolio(self.portfolio)

    def save(self) -> Path:
        """Write the portfolio to its current file.

        Raises:
            DataError: If no file is associated yet or writing fails
        """
        if self.path is None:
            raise DataError("Portfolio has no file yet, use save_as")
        return self._write(self.path)

    def save_as(self, path: Path | str) -> Path:
        """Write the portfolio to path and make it the current file.

        Paths without an extension get the document suffix.
        """
        path = Path(path)
        if not path.suffix:
            path = path.with_suffix(DOCUMENT_SUFFIX)
        self._write(path)
        self.path = path
        self.portfolio.docroot = str(path.parent)
        return path

    def save_if_dirty(self) -> bool:
        """Autosave hook: save only when there are unsaved changes and a file."""
        if self.path is None or not self.is_dirty():
            return False
        self.save()
        return True

    def _write(self, path: Path) -> Path:
        text = serialize_portfolio(self.portfolio)
        try:
            path.write_text(text, encoding=DOCUMENT_ENCODING)
        except OSError as e:
            logger.error(f"Failed to write portfolio document {path}: {e}")
            raise DataError(f"Failed to write portfolio document: {path.name}") from e
        self._saved_text = text
        logger.info(f"Saved portfolio {self.portfolio.name!r} to {path}")
        return path
