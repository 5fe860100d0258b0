"""Plain-text rendering for the console front end."""
from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from core.exceptions import LoadError
from verbs.forms import TenseRow, VerbForms
from verbs.models import VerbRecord

RULE = "-" * 72


def render_header(status: str) -> str:
    return "\n".join([">> EP VERB CONSOLE", RULE, status, RULE])


def render_row(record: VerbRecord) -> str:
    translation = record.translation or ""
    return f"{record.rank_label:<6}{record.verb:<18}{translation:<30}[{record.class_label}]"


def render_listing(rows: Sequence[VerbRecord]) -> str:
    if not rows:
        return "(no verbs match)"
    return "\n".join(render_row(r) for r in rows)


def _grid(title: str, persons: Sequence[str], rows: Iterable[Tuple[str, Sequence[str]]]) -> List[str]:
    rows = list(rows)
    label_width = max([len(label) for label, _ in rows] + [0]) + 2
    widths = [
        max([len(p)] + [len(forms[i]) for _, forms in rows]) + 2
        for i, p in enumerate(persons)
    ]
    lines = [f"  MODE {title}"]
    lines.append("  " + " " * label_width + "".join(p.ljust(w) for p, w in zip(persons, widths)))
    for label, forms in rows:
        lines.append("  " + label.ljust(label_width) + "".join(f.ljust(w) for f, w in zip(forms, widths)))
    return lines


def _tense_rows(rows: Sequence[TenseRow]) -> List[Tuple[str, Sequence[str]]]:
    return [(row.label.upper(), row.forms) for row in rows]


def render_forms(record: VerbRecord, forms: VerbForms) -> str:
    """Render every table of an expanded verb card."""
    lines = [f"{record.rank_label} {record.verb} ({record.translation})", RULE]
    lines += _grid("INDICATIVO", forms.persons, _tense_rows(forms.indicativo))
    lines.append("")
    lines += _grid("SUBJUNTIVO", forms.persons, _tense_rows(forms.subjuntivo))
    lines.append("")
    for title, pairs in (
        ("IMPERATIVO AFIRMATIVO", forms.imperativo.afirmativo),
        ("IMPERATIVO NEGATIVO", forms.imperativo.negativo),
    ):
        lines.append(f"  MODE {title}")
        lines += [f"    {addressee:<8}{form}" for addressee, form in pairs]
    lines.append("")
    lines.append("  MODE NOMINAIS")
    lines += [f"    {label.upper():<14}{form}" for label, form in forms.non_finite]
    lines.append("")
    lines += _grid("INFINITIVO PESSOAL", forms.persons, [("INF. PESSOAL", forms.personal_infinitive)])
    return "\n".join(lines)


def render_examples(record: VerbRecord, examples: Sequence[str]) -> str:
    lines = [f"{record.rank_label} {record.verb} ({record.translation})", RULE]
    lines += [f"  - {example}" for example in examples] or ["  (no examples)"]
    return "\n".join(lines)


def render_load_error(error: LoadError) -> str:
    return "\n".join([">> ERROR", RULE, str(error), RULE, f"FIX: {error.hint}"])
