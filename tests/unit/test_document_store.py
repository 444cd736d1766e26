"""
Unit tests for document file storage and dirty tracking.
"""

from datetime import date
from pathlib import Path

import pytest

from portfolio_tracker.core.exceptions.portfolio import DataError, DocumentFormatError
from portfolio_tracker.core.models import Portfolio, Revenue
from portfolio_tracker.infrastructure.storage import DocumentStore


class TestDocumentStore:
    """Tests for DocumentStore."""

    @pytest.fixture
    def saved_path(self, portfolio: Portfolio, tmp_path: Path) -> Path:
        """Write the sample portfolio to a temporary document file."""
        path = tmp_path / "holdings.velfi"
        DocumentStore(portfolio).save_as(path)
        return path

    def test_should_open_saved_document(self, saved_path: Path) -> None:
        store = DocumentStore.open(saved_path)

        assert store.portfolio.name == "Family Office"
        assert store.path == saved_path
        assert store.portfolio.docroot == str(saved_path.parent)
        assert not store.is_dirty()

    def test_should_track_changes(self, saved_path: Path) -> None:
        """Test dirty tracking through an edit and a save."""
        store = DocumentStore.open(saved_path)
        asset = store.portfolio.entities[0].assets[0]

        asset.add_revenue(Revenue(date(2023, 3, 1), "Dividend", 12.5))
        assert store.is_dirty()

        store.save()
        assert not store.is_dirty()
        reopened = DocumentStore.open(saved_path)
        assert len(reopened.portfolio.entities[0].assets[0].revenues) == 3

    def test_should_mark_clean_without_saving(self, saved_path: Path) -> None:
        store = DocumentStore.open(saved_path)
        store.portfolio.name = "Renamed"

        store.mark_clean()

        assert not store.is_dirty()
        assert DocumentStore.open(saved_path).portfolio.name == "Family Office"

    def test_should_autosave_only_when_dirty(self, saved_path: Path) -> None:
        store = DocumentStore.open(saved_path)

        assert store.save_if_dirty() is False
        store.portfolio.name = "Renamed"
        assert store.save_if_dirty() is True
        assert DocumentStore.open(saved_path).portfolio.name == "Renamed"

    def test_should_require_path_for_save(self, portfolio: Portfolio) -> None:
        store = DocumentStore(portfolio)

        with pytest.raises(DataError, match="save_as"):
            store.save()
        assert store.save_if_dirty() is False

    def test_should_switch_path_on_save_as(self, saved_path: Path, tmp_path: Path) -> None:
        store = DocumentStore.open(saved_path)
        target_dir = tmp_path / "copies"
        target_dir.mkdir()

        store.save_as(target_dir / "copy.velfi")

        assert store.path == target_dir / "copy.velfi"
        assert store.portfolio.docroot == str(target_dir)

    def test_should_add_document_suffix(self, portfolio: Portfolio, tmp_path: Path) -> None:
        store = DocumentStore(portfolio)

        written = store.save_as(tmp_path / "holdings")

        assert written == tmp_path / "holdings.velfi"
        assert store.path == written
        assert written.exists()

    def test_should_raise_data_error_for_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(DataError, match="Failed to read"):
            DocumentStore.open(tmp_path / "missing.velfi")

    def test_should_raise_format_error_for_invalid_content(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.velfi"
        path.write_text("not a document", encoding="utf-8")

        with pytest.raises(DocumentFormatError):
            DocumentStore.open(path)
