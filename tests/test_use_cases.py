"""Unit tests for use cases."""
import pytest
from unittest.mock import Mock

from app.browse_state import BrowseState
from app.use_cases import (
    BrowseVerbsUseCase,
    ExpandVerbUseCase,
    LoadDatasetUseCase,
    SpeakFormUseCase,
)
from core.exceptions import DatasetNotFoundError, MissingTenseError
from core.result import Failure, Success
from verbs.query import QueryEngine
from tests.helpers import make_record


class TestLoadDatasetUseCase:
    """Tests for LoadDatasetUseCase."""

    def test_successful_load(self):
        # Arrange
        records = (make_record("falar", 1),)
        mock_repository = Mock()
        mock_repository.load.return_value = Success(records)
        use_case = LoadDatasetUseCase(mock_repository)

        # Act
        result = use_case.execute()

        # Assert
        assert result.is_success()
        assert result.unwrap() == records
        mock_repository.load.assert_called_once()

    def test_failure_is_passed_through(self):
        # Arrange
        error = DatasetNotFoundError("missing")
        mock_repository = Mock()
        mock_repository.load.return_value = Failure(error)
        use_case = LoadDatasetUseCase(mock_repository)

        # Act
        result = use_case.execute()

        # Assert
        assert result.is_failure()
        assert result.error is error


class TestBrowseVerbsUseCase:
    """Tests for BrowseVerbsUseCase."""

    @pytest.fixture
    def records(self):
        return (
            make_record("ser", 1, "er", irregular=True, translation="to be"),
            make_record("falar", 2, "ar", translation="to speak"),
            make_record("fazer", 3, "er", irregular=True, translation="to do"),
        )

    def test_filter_and_search(self, records):
        # Arrange
        use_case = BrowseVerbsUseCase(QueryEngine())
        state = BrowseState().with_filter("er").with_search("fa")

        # Act
        result = use_case.execute(records, state)

        # Assert
        assert [r.verb for r in result.rows] == ["fazer"]
        assert result.total == 3
        assert result.status == "ACTIVE FILTER: ER | SEARCH: fa | COUNT: 1/3"

    def test_empty_state_shows_everything(self, records):
        result = BrowseVerbsUseCase(QueryEngine()).execute(records, BrowseState())

        assert result.rows == records


class TestExpandVerbUseCase:
    """Tests for ExpandVerbUseCase."""

    def test_successful_expansion(self):
        # Arrange
        forms = Mock()
        mock_deriver = Mock()
        mock_deriver.derive_all.return_value = forms
        use_case = ExpandVerbUseCase(mock_deriver)

        # Act
        result = use_case.execute(make_record("falar", 1))

        # Assert
        assert result.is_success()
        assert result.unwrap() is forms

    def test_derivation_error_becomes_failure(self):
        # Arrange
        mock_deriver = Mock()
        mock_deriver.derive_all.side_effect = MissingTenseError("falar", "indicativo", "futuro")
        use_case = ExpandVerbUseCase(mock_deriver)

        # Act
        result = use_case.execute(make_record("falar", 1))

        # Assert
        assert result.is_failure()
        assert isinstance(result.error, MissingTenseError)

    def test_unexpected_error_propagates(self):
        mock_deriver = Mock()
        mock_deriver.derive_all.side_effect = RuntimeError("bug")

        with pytest.raises(RuntimeError):
            ExpandVerbUseCase(mock_deriver).execute(make_record("falar", 1))


class TestSpeakFormUseCase:
    """Tests for SpeakFormUseCase."""

    def test_delegates_to_dispatcher(self):
        # Arrange
        mock_dispatcher = Mock()
        mock_dispatcher.speak.return_value = True
        use_case = SpeakFormUseCase(mock_dispatcher)

        # Act
        started = use_case.execute("falamos", "btn-7")

        # Assert
        assert started is True
        mock_dispatcher.speak.assert_called_once_with("falamos", "btn-7")

    def test_reports_unavailable_speech(self):
        mock_dispatcher = Mock()
        mock_dispatcher.speak.return_value = False

        assert SpeakFormUseCase(mock_dispatcher).execute("falo") is False
