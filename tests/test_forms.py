"""Unit tests for form derivation."""
import pytest

from core.exceptions import MissingConjugationsError, MissingTenseError
from verbs.forms import FormDeriver, INDICATIVE_TENSES, SUBJUNCTIVE_TENSES
from verbs.models import ADDRESSEES, ExampleVerb, Mood
from verbs.repository import ConjugationRepository
from tests.helpers import make_verb_dict


@pytest.fixture
def deriver():
    return FormDeriver()


@pytest.fixture
def falar(sample_dataset_path):
    repository = ConjugationRepository(sample_dataset_path)
    repository.load()
    return repository.get("falar")


def _load_single(write_dataset, record):
    repository = ConjugationRepository(write_dataset([record]))
    return repository.load().unwrap()[0]


class TestTenseTables:
    """Tests for person x tense tables."""

    def test_indicative_has_five_rows_in_fixed_order(self, deriver, falar):
        rows = deriver.derive_table(falar, Mood.INDICATIVO)

        assert [row.key for row in rows] == [key for key, _ in INDICATIVE_TENSES]
        assert rows[0].label == "Presente"
        assert rows[0].forms == ("falo", "falas", "fala", "falamos", "falais", "falam")

    def test_subjunctive_has_three_rows(self, deriver, falar):
        rows = deriver.derive_table(falar, Mood.SUBJUNTIVO)

        assert [row.key for row in rows] == [key for key, _ in SUBJUNCTIVE_TENSES]
        assert rows[2].forms[0] == "falar"

    def test_every_row_has_six_forms(self, deriver, falar):
        for mood in Mood:
            assert all(len(row.forms) == 6 for row in deriver.derive_table(falar, mood))

    def test_order_ignores_dataset_key_order(self, deriver, write_dataset):
        # Arrange
        record = make_verb_dict("falar", 1)
        indicativo = record["conjugations"]["indicativo"]
        record["conjugations"]["indicativo"] = dict(reversed(list(indicativo.items())))
        verb = _load_single(write_dataset, record)

        # Act
        rows = deriver.derive_table(verb, Mood.INDICATIVO)

        # Assert
        assert [row.key for row in rows] == [key for key, _ in INDICATIVE_TENSES]

    def test_missing_tense_raises(self, deriver, write_dataset):
        # Arrange
        record = make_verb_dict("falar", 1)
        del record["conjugations"]["indicativo"]["futuro"]
        verb = _load_single(write_dataset, record)

        # Act
        with pytest.raises(MissingTenseError) as exc_info:
            deriver.derive_table(verb, Mood.INDICATIVO)

        # Assert
        assert exc_info.value.verb == "falar"
        assert exc_info.value.mood == "indicativo"
        assert exc_info.value.key == "futuro"

    def test_custom_enumeration(self, falar):
        deriver = FormDeriver(indicative_tenses=[("futuro", "Futuro")])

        rows = deriver.derive_table(falar, "indicativo")

        assert [row.label for row in rows] == ["Futuro"]


class TestOtherForms:
    """Tests for the imperative, non-finite and personal infinitive views."""

    def test_imperative_in_addressee_order(self, deriver, falar):
        table = deriver.derive_imperative(falar)

        assert [addressee for addressee, _ in table.afirmativo] == list(ADDRESSEES)
        assert table.afirmativo[0] == ("tu", "fala")
        assert table.negativo[-1] == ("vocês", "não falem")

    def test_missing_imperative_polarity_raises(self, deriver, write_dataset):
        record = make_verb_dict("falar", 1)
        del record["conjugations"]["imperativo"]["negativo"]
        verb = _load_single(write_dataset, record)

        with pytest.raises(MissingTenseError):
            deriver.derive_imperative(verb)

    def test_non_finite_in_dataset_order(self, deriver, falar):
        assert deriver.derive_non_finite(falar) == (
            ("infinitivo", "falar"),
            ("gerúndio", "falando"),
            ("particípio", "falado"),
        )

    def test_personal_infinitive(self, deriver, falar):
        assert deriver.derive_personal_infinitive(falar) == (
            "falar", "falares", "falar", "falarmos", "falardes", "falarem",
        )

    def test_personal_infinitive_requires_infinitive(self, deriver, write_dataset):
        record = make_verb_dict("falar", 1)
        del record["conjugations"]["non_finite"]["infinitivo"]
        verb = _load_single(write_dataset, record)

        with pytest.raises(MissingTenseError) as exc_info:
            deriver.derive_personal_infinitive(verb)

        assert exc_info.value.key == "infinitivo"

    def test_derive_all(self, deriver, falar):
        forms = deriver.derive_all(falar)

        assert forms.persons == ("eu", "tu", "ele/ela", "nós", "vós", "eles/elas")
        assert len(forms.indicativo) == 5
        assert len(forms.subjuntivo) == 3
        assert forms.personal_infinitive[1] == "falares"


class TestExampleRecords:
    """Tests for records of the example-sentence schema."""

    @pytest.fixture
    def example_verb(self):
        return ExampleVerb(
            rank=1,
            verb="lembrar-se",
            translation="to remember",
            category="ar",
            irregular=False,
            examples=("Lembro-me – I remember",),
        )

    def test_conjugation_views_raise(self, deriver, example_verb):
        with pytest.raises(MissingConjugationsError):
            deriver.derive_table(example_verb, Mood.INDICATIVO)
        with pytest.raises(MissingConjugationsError):
            deriver.derive_all(example_verb)

    def test_examples_view(self, deriver, example_verb, falar):
        assert deriver.derive_examples(example_verb) == ("Lembro-me – I remember",)
        assert deriver.derive_examples(falar) == ()
