"""
Presentation table for ANOVA results.

Collects the formatted cells under APA column headers. Rendering to LaTeX
or Word is left to a table renderer; to_records() and to_markdown() are
only for inspection.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass


ES_HEADERS = {
    'pes': "$\\eta^2_p$",
    'ges': "$\\eta^2_G$",
    'es': "$\\eta^2$",
}

MSE_HEADER = "$\\mathit{MSE}$"


@dataclass(frozen=True)
class ApaTable:
    """Formatted table: column headers plus one tuple of cells per term."""
    columns: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...]
    terms: tuple[str, ...]            # sanitized term of each row

    def __len__(self) -> int:
        return len(self.rows)

    def column(self, header: str) -> list[str]:
        """Cells of one column, top to bottom."""
        j = self.columns.index(header)
        return [row[j] for row in self.rows]

    def to_records(self) -> list[dict[str, str]]:
        """One {header: cell} dict per row, e.g. for pandas.DataFrame()."""
        return [dict(zip(self.columns, row)) for row in self.rows]

    def to_markdown(self) -> str:
        """Pipe table, mostly for quick inspection."""
        lines = [
            "| " + " | ".join(self.columns) + " |",
            "|" + "|".join("---" for _ in self.columns) + "|",
        ]
        for row in self.rows:
            lines.append("| " + " | ".join(row) + " |")
        return "\n".join(lines)


def column_headers(
    es: Sequence[str],
    mse: bool,
    correction: str | None,
) -> tuple[str, ...]:
    """
    APA headers for an ANOVA table.

    Degrees of freedom carry the correction method as superscript, e.g.
    $\\mathit{df}_1^{GG}$, unless no correction (None or "none") was applied.
    """
    if correction is not None and correction != "none":
        df_headers = (
            f"$\\mathit{{df}}_1^{{{correction}}}$",
            f"$\\mathit{{df}}_2^{{{correction}}}$",
        )
    else:
        df_headers = ("$\\mathit{df}_1$", "$\\mathit{df}_2$")

    return (
        "Effect",
        "$F$",
        *df_headers,
        *((MSE_HEADER,) if mse else ()),
        "$p$",
        *(ES_HEADERS[code] for code in es),
    )


def assemble_table(
    labels: Sequence[str],
    terms: Sequence[str],
    cells: Mapping[str, Sequence[str]],
    *,
    es: Sequence[str],
    mse: bool,
    correction: str | None,
    order: Sequence[int],
) -> ApaTable:
    """
    Build the presentation table.

    Args:
        labels: Prettified effect labels, one per term
        terms: Sanitized term names, one per term
        cells: Formatted columns keyed "statistic", "df", "df_res", "mse",
            "p.value" and one key per effect-size code
        es: Effect-size codes in report order
        mse: Whether to include the MSE column
        correction: Sphericity correction of the df, or None
        order: Row order (see sort_effects)
    """
    keys = ["statistic", "df", "df_res", *(["mse"] if mse else []), "p.value", *es]
    rows = tuple(
        (labels[i], *(cells[key][i] for key in keys))
        for i in order
    )
    return ApaTable(
        columns=column_headers(es, mse, correction),
        rows=rows,
        terms=tuple(terms[i] for i in order),
    )
