"""
Tests for print_anova().

Validates:
    - Statistic, estimate and full_result strings
    - MSE, in_paren, intercept and es options
    - Generalized eta-squared with observed factors and error strata
    - Fail-fast errors (unsupported effect size, missing observed factor)
    - Row count of the presentation table
    - Effect sizes that round to zero and very large statistics
    - Immutability and metadata of the result
"""

import numpy as np
import pytest

from apaprint.anova import VarianceTable, print_anova
from apaprint.core.exceptions import (
    MissingFactorError,
    UnsupportedEffectSizeError,
    ValidationError,
)
from apaprint.core.options import option_context


class TestSingleTerm:
    """F(1, 20) = 5, SS 10 against error SS 40."""

    def test_statistic(self, single_term_columns):
        res = print_anova(single_term_columns, es="pes", mse=True)
        assert res.statistic["A"] == (
            "$F(1, 20) = 5.00$, $\\mathit{MSE} = 2.00$, $p = .035$"
        )

    def test_estimate(self, single_term_columns):
        res = print_anova(single_term_columns, es="pes", mse=True)
        assert res.estimate["A"] == "$\\eta^2_p = .20$"

    def test_full_result(self, single_term_columns):
        res = print_anova(single_term_columns, es="pes")
        assert res.full_result["A"] == res.statistic["A"] + ", " + res.estimate["A"]

    def test_table(self, single_term_columns):
        res = print_anova(single_term_columns, es="pes", mse=True)
        assert res.table.columns == (
            "Effect", "$F$", "$\\mathit{df}_1$", "$\\mathit{df}_2$",
            "$\\mathit{MSE}$", "$p$", "$\\eta^2_p$",
        )
        assert res.table.rows == (("A", "5.00", "1", "20", "2.00", ".035", ".20"),)

    def test_accepts_variance_table(self, single_term_columns):
        table = VarianceTable.from_columns(single_term_columns)
        res = print_anova(table, es="pes")
        assert res.estimate["A"] == "$\\eta^2_p = .20$"

    def test_unrounded_effect_sizes(self, single_term_columns):
        res = print_anova(single_term_columns, es="pes")
        np.testing.assert_allclose(res.effect_sizes["pes"]["A"], 0.2)


class TestMse:

    def test_without_mse(self, single_term_columns):
        res = print_anova(single_term_columns, es="pes", mse=False)
        assert res.statistic["A"] == "$F(1, 20) = 5.00$, $p = .035$"
        assert "$\\mathit{MSE}$" not in res.table.columns

    def test_default_from_option(self, single_term_columns):
        with option_context(mse=False):
            res = print_anova(single_term_columns)
        assert "MSE" not in res.statistic["A"]
        assert res.info["mse"] is False

    def test_default_is_on(self, single_term_columns):
        res = print_anova(single_term_columns)
        assert "\\mathit{MSE} = 2.00" in res.statistic["A"]


class TestInParen:

    def test_brackets(self, single_term_columns):
        res = print_anova(single_term_columns, es="pes", in_paren=True)
        assert res.statistic["A"] == (
            "$F[1, 20] = 5.00$, $\\mathit{MSE} = 2.00$, $p = .035$"
        )

    def test_full_result_uses_bracketed_statistic(self, single_term_columns):
        res = print_anova(single_term_columns, es="pes", in_paren=True)
        assert res.full_result["A"].startswith("$F[1, 20]")

    def test_estimate_untouched(self, single_term_columns):
        res = print_anova(single_term_columns, es="pes", in_paren=True)
        assert res.estimate["A"] == "$\\eta^2_p = .20$"


class TestEffectSizeSelection:

    def test_default_is_generalized(self, twoway_table):
        res = print_anova(twoway_table)
        assert res.es == ("ges",)
        assert res.estimate["dose"] == "$\\eta^2_G = .22$"
        assert res.estimate["sex"] == "$\\eta^2_G = .10$"
        assert res.estimate["dose_sex"] == "$\\eta^2_G = .05$"

    def test_report_order(self, single_term_columns):
        res = print_anova(single_term_columns, es=["es", "pes"])
        assert res.estimate["A"] == "$\\eta^2_p = .20$, $\\eta^2 = .20$"
        assert res.table.columns[-2:] == ("$\\eta^2_p$", "$\\eta^2$")

    def test_all_three(self, twoway_table):
        res = print_anova(twoway_table, es=["ges", "pes", "es"])
        assert res.estimate["dose"] == (
            "$\\eta^2_p = .22$, $\\eta^2_G = .22$, $\\eta^2 = .03$"
        )

    def test_none(self, single_term_columns):
        res = print_anova(single_term_columns, es=None)
        assert dict(res.estimate) == {}
        assert dict(res.full_result) == dict(res.statistic)
        assert res.table.columns[-1] == "$p$"

    def test_es_digits_option(self, single_term_columns):
        with option_context(es_digits=3):
            res = print_anova(single_term_columns, es="pes")
        assert res.estimate["A"] == "$\\eta^2_p = .200$"

    def test_unsupported(self, single_term_columns):
        with pytest.raises(UnsupportedEffectSizeError, match="omega"):
            print_anova(single_term_columns, es="omega")

    def test_unsupported_among_supported(self, single_term_columns):
        with pytest.raises(UnsupportedEffectSizeError, match="pes, cohens_f"):
            print_anova(single_term_columns, es=["pes", "cohens_f"])


class TestObserved:

    def test_observed_factor(self, twoway_table):
        res = print_anova(twoway_table, es="ges", observed="sex")
        assert res.estimate["dose"] == "$\\eta^2_G = .19$"
        assert res.estimate["sex"] == "$\\eta^2_G = .10$"
        assert res.estimate["dose_sex"] == "$\\eta^2_G = .05$"

    def test_missing_observed_factor(self, twoway_table):
        with pytest.raises(MissingFactorError, match="age"):
            print_anova(twoway_table, es="ges", observed=["sex", "age"])

    def test_observed_ignored_without_ges(self, twoway_table):
        res = print_anova(twoway_table, es="pes", observed="age")
        assert res.estimate["dose"] == "$\\eta^2_p = .22$"

    def test_observed_must_be_strings(self, twoway_table):
        with pytest.raises(ValidationError, match="observed"):
            print_anova(twoway_table, observed=[1])


class TestIntercept:

    def test_dropped_by_default(self, twoway_table):
        res = print_anova(twoway_table)
        assert list(res.statistic) == ["dose", "sex", "dose_sex"]
        assert res.info["dropped_terms"] == ("(Intercept)",)

    def test_kept_on_request(self, twoway_table):
        res = print_anova(twoway_table, intercept=True)
        assert res.statistic["Intercept"] == (
            "$F(1, 54) = 500.00$, $\\mathit{MSE} = 2.00$, $p < .001$"
        )
        assert res.table.rows[0][0] == "Intercept"
        assert len(res.table) == 4

    def test_intercept_in_eta_squared_total(self, twoway_table):
        res = print_anova(twoway_table, es="es")
        np.testing.assert_allclose(res.effect_sizes["es"]["dose"], 30 / 1156)
        assert res.estimate["dose"] == "$\\eta^2 = .03$"

    def test_only_intercept(self, twoway_columns):
        cols = {k: v[:1] for k, v in twoway_columns.items()}
        res = print_anova(cols)
        assert dict(res.statistic) == {}
        assert dict(res.estimate) == {}
        assert dict(res.full_result) == {}
        assert dict(res.effect_sizes["ges"]) == {}
        assert len(res.table) == 0
        assert res.table.columns[0] == "Effect"
        assert res.info["dropped_terms"] == ("(Intercept)",)


class TestExtremeValues:

    def test_effect_size_rounding_to_zero(self, single_term_columns):
        cols = {**single_term_columns, 'sumsq': [0.01], 'statistic': [0.005], 'p.value': [0.5]}
        res = print_anova(cols, es="pes")
        assert res.estimate["A"] == "$\\eta^2_p < .01$"
        assert res.full_result["A"].endswith(", $\\eta^2_p < .01$")
        assert res.table.column("$\\eta^2_p$") == ["< .01"]

    def test_several_effect_sizes_rounding_to_zero(self, single_term_columns):
        cols = {**single_term_columns, 'sumsq': [0.01], 'statistic': [0.005], 'p.value': [0.5]}
        res = print_anova(cols, es=["pes", "es"])
        assert res.estimate["A"] == "$\\eta^2_p < .01$, $\\eta^2 < .01$"

    def test_huge_statistic(self, single_term_columns):
        cols = {**single_term_columns, 'statistic': [1e30], 'p.value': [0.0]}
        res = print_anova(cols)
        huge = "1" + ",000" * 10 + ".00"
        assert res.statistic["A"] == (
            f"$F(1, 20) = {huge}$, $\\mathit{{MSE}} = 2.00$, $p < .001$"
        )

    def test_huge_mse(self, single_term_columns):
        cols = {**single_term_columns, 'sumsq_err': [1e30], 'df_res': [1]}
        res = print_anova(cols, es="pes")
        assert "$\\mathit{MSE} = " + "1" + ",000" * 10 + ".00$" in res.statistic["A"]


class TestPValues:

    def test_small_p(self, twoway_table):
        res = print_anova(twoway_table)
        assert res.statistic["dose"].endswith("$p < .001$")

    def test_regular_p(self, twoway_table):
        res = print_anova(twoway_table)
        assert res.statistic["sex"] == (
            "$F(2, 54) = 3.00$, $\\mathit{MSE} = 2.00$, $p = .058$"
        )

    def test_table_p_without_equals(self, twoway_table):
        res = print_anova(twoway_table)
        assert res.table.column("$p$") == ["< .001", ".058", ".232"]


class TestWithinSubjects:
    """aovlist_residuals row feeds generalized eta-squared and is dropped."""

    def test_dummy_row_dropped(self, within_table):
        res = print_anova(within_table, es=["pes", "ges"])
        assert list(res.statistic) == ["cond"]
        assert len(res.table) == 1

    def test_statistic(self, within_table):
        res = print_anova(within_table, es=["pes", "ges"])
        assert res.statistic["cond"] == (
            "$F(2, 18) = 5.00$, $\\mathit{MSE} = 2.00$, $p = .019$"
        )

    def test_generalized_uses_all_strata(self, within_table):
        res = print_anova(within_table, es=["pes", "ges"])
        assert res.estimate["cond"] == "$\\eta^2_p = .36$, $\\eta^2_G = .19$"
        np.testing.assert_allclose(res.effect_sizes["ges"]["cond"], 20 / 106)


class TestTableShape:

    def test_row_count_matches_retained_terms(self, twoway_table):
        for intercept, expected in ((False, 3), (True, 4)):
            res = print_anova(twoway_table, intercept=intercept)
            assert len(res.table) == expected
            assert len(res.table.rows) == len(res.statistic)

    def test_sorted_by_interaction_order(self):
        res = print_anova({
            'term': ['dose:sex', 'dose', 'sex'],
            'sumsq': [6.0, 30.0, 12.0],
            'sumsq_err': [108.0] * 3,
            'df': [2, 1, 2],
            'df_res': [54] * 3,
            'statistic': [1.5, 15.0, 3.0],
            'p.value': [0.232, 0.0003, 0.058],
        })
        assert list(res.statistic) == ["dose_sex", "dose", "sex"]
        assert res.table.column("Effect") == ["Dose", "Sex", "Dose $\\times$ Sex"]
        assert res.table.terms == ("dose", "sex", "dose_sex")

    def test_correction_headers(self, twoway_columns):
        table = VarianceTable.from_columns(twoway_columns, correction="GG")
        res = print_anova(table)
        assert res.table.columns[2:4] == (
            "$\\mathit{df}_1^{GG}$", "$\\mathit{df}_2^{GG}$",
        )
        assert res.info["correction"] == "GG"

    def test_correction_none_plain_headers(self, twoway_columns):
        table = VarianceTable.from_columns(twoway_columns, correction="none")
        res = print_anova(table)
        assert res.table.columns[2] == "$\\mathit{df}_1$"


class TestArgumentValidation:

    def test_intercept_must_be_bool(self, single_term_columns):
        with pytest.raises(ValidationError, match="intercept"):
            print_anova(single_term_columns, intercept=1)

    def test_in_paren_must_be_bool(self, single_term_columns):
        with pytest.raises(ValidationError, match="in_paren"):
            print_anova(single_term_columns, in_paren="yes")

    def test_mse_must_be_bool(self, single_term_columns):
        with pytest.raises(ValidationError, match="mse"):
            print_anova(single_term_columns, mse="no")

    def test_es_must_be_strings(self, single_term_columns):
        with pytest.raises(ValidationError, match="es"):
            print_anova(single_term_columns, es=3)

    def test_x_must_be_table(self):
        with pytest.raises(ValidationError, match="mapping of columns"):
            print_anova([1, 2, 3])

    def test_duplicate_sanitized_terms(self, single_term_columns):
        cols = {k: v * 2 for k, v in single_term_columns.items()}
        cols['term'] = ['A:B', 'A_B']
        with pytest.raises(ValidationError, match="duplicate"):
            print_anova(cols)


class TestResult:

    def test_strings_read_only(self, single_term_columns):
        res = print_anova(single_term_columns)
        with pytest.raises(TypeError):
            res.statistic["A"] = "changed"

    def test_info(self, single_term_columns):
        res = print_anova(single_term_columns, es=["es", "pes"], observed="A")
        assert res.info["es"] == ("pes", "es")
        assert res.info["observed"] == ("A",)
        assert res.info["intercept"] is False
        assert res.timing["total_seconds"] >= 0

    def test_zero_denominator_recorded(self):
        cols = {
            'term': ['A'], 'sumsq': [0.0], 'sumsq_err': [0.0], 'df': [1],
            'df_res': [10], 'statistic': [0.0], 'p.value': [1.0],
        }
        with pytest.warns(RuntimeWarning, match="zero denominator"):
            res = print_anova(cols, es="pes")
        assert any("zero denominator" in w for w in res.warnings)

    def test_summary(self, twoway_table):
        text = print_anova(twoway_table).summary()
        assert "dose_sex: $F(2, 54) = 1.50$" in text
        assert "| Effect |" in text

    def test_repr(self, single_term_columns):
        assert "AnovaPrintSolution" in repr(print_anova(single_term_columns))
