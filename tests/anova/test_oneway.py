"""
Tests for one-way ANOVA.

Validates:
    - Worked example against R summary(aov())
    - Table structure (terms, df, SS, MS, F, p)
    - Partition identities (additivity, df sum, non-negativity)
    - 2-group matches F-test / t-test equivalence
    - Agreement with scipy.stats.f_oneway
    - Equal-means case (F = 0)
    - Zero within-group variance policy
    - Error taxonomy for invalid and degenerate inputs
    - Effect sizes, metadata, warnings and timing
"""

import math

import numpy as np
import pytest
from numpy.testing import assert_allclose
from scipy import stats as sp_stats

from pyanova.anova import Observation, anova_oneway
from pyanova.core.exceptions import (
    DegenerateDesignError,
    InvalidInputError,
    PyAnovaError,
    ValidationError,
)


class TestWorkedExample:
    """
    pursuit = [95, 90, 97, 95], flight = [85, 89, 92, 89],
    substance = [75, 77, 79, 80].

    Hand computation:
        G = 1043, N = 12, grand mean = 86.91667
        T = (377, 355, 311); sum T^2/n = 91218.75; G^2/N = 90654.08333
        sum y^2 = 91285
        SS_total = 630.91667, SS_between = 564.66667, SS_within = 66.25
        F = (564.66667/2) / (66.25/9) = 10164/265 = 38.354717
        p = (1 + 2F/9)^(-9/2)     (closed form for df1 = 2)
    """

    def test_sums_of_squares(self, worked_example):
        result = anova_oneway(worked_example)
        assert_allclose(result.ss_total, 630.9166666666667, rtol=1e-12)
        assert_allclose(result.ss_between, 564.6666666666667, rtol=1e-12)
        assert_allclose(result.ss_within, 66.25, rtol=1e-12)

    def test_degrees_of_freedom(self, worked_example):
        result = anova_oneway(worked_example)
        assert result.df_between == 2
        assert result.df_within == 9

    def test_mean_squares(self, worked_example):
        result = anova_oneway(worked_example)
        assert_allclose(result.ms_between, 847.0 / 3.0, rtol=1e-12)
        assert_allclose(result.ms_within, 265.0 / 36.0, rtol=1e-12)

    def test_f_value(self, worked_example):
        result = anova_oneway(worked_example)
        assert_allclose(result.f_value, 10164.0 / 265.0, rtol=1e-12)
        assert result.f_value == pytest.approx(38.35, abs=0.01)

    def test_p_value_closed_form(self, worked_example):
        result = anova_oneway(worked_example)
        expected = (1.0 + 2.0 * result.f_value / 9.0) ** -4.5
        assert_allclose(result.p_value, expected, rtol=1e-10)
        assert result.p_value == pytest.approx(3.93e-5, rel=1e-2)

    def test_grand_mean_and_total(self, worked_example):
        result = anova_oneway(worked_example)
        assert result.grand_total == 1043.0
        assert_allclose(result.grand_mean, 1043.0 / 12.0, rtol=1e-12)

    def test_group_summaries(self, worked_example):
        result = anova_oneway(worked_example)
        labels = [g.label for g in result.groups]
        assert labels == ['pursuit', 'flight', 'substance']
        assert [g.n for g in result.groups] == [4, 4, 4]
        assert [g.total for g in result.groups] == [377.0, 355.0, 311.0]
        assert result.group_means == {
            'pursuit': 94.25, 'flight': 88.75, 'substance': 77.75,
        }
        assert_allclose(
            [g.sum_sq for g in result.groups], [26.75, 24.75, 14.75], rtol=1e-12
        )

    def test_reject_null_at_05(self, worked_example):
        result = anova_oneway(worked_example)
        f_crit = result.critical_value(0.05)
        # closed form for df1 = 2: f_crit = (df2/2) (alpha^(-2/df2) - 1)
        assert_allclose(f_crit, 4.5 * (0.05 ** (-2.0 / 9.0) - 1.0), rtol=1e-8)
        assert f_crit == pytest.approx(4.2565, abs=1e-4)
        assert result.f_value > f_crit
        assert result.reject_null(0.05)
        assert result.significant(0.05)

    def test_matches_scipy_f_oneway(self, worked_example):
        result = anova_oneway(worked_example)
        ref = sp_stats.f_oneway(*worked_example.values())
        assert_allclose(result.f_value, ref.statistic, rtol=1e-10)
        assert_allclose(result.p_value, ref.pvalue, rtol=1e-8)


class TestInputForms:
    """All input forms normalise to the same analysis."""

    def test_pairs(self, worked_example):
        pairs = [(g, v) for g, vs in worked_example.items() for v in vs]
        result = anova_oneway(pairs)
        assert_allclose(result.f_value, 10164.0 / 265.0, rtol=1e-12)
        assert result.info['source'] == 'pairs'

    def test_observations(self, worked_example):
        obs = [Observation(g, v) for g, vs in worked_example.items() for v in vs]
        result = anova_oneway(obs)
        assert_allclose(result.f_value, 10164.0 / 265.0, rtol=1e-12)

    def test_arrays(self, worked_example):
        y = np.concatenate([np.asarray(v, dtype=float) for v in worked_example.values()])
        group = np.repeat(list(worked_example.keys()), 4)
        result = anova_oneway(y, group)
        assert_allclose(result.f_value, 10164.0 / 265.0, rtol=1e-12)
        assert result.info['source'] == 'arrays'

    def test_interleaved_pairs_same_result(self, worked_example):
        pairs = [(g, v) for g, vs in worked_example.items() for v in vs]
        shuffled = pairs[::2] + pairs[1::2]
        a = anova_oneway(pairs)
        b = anova_oneway(shuffled)
        assert_allclose(a.f_value, b.f_value, rtol=1e-12)
        assert_allclose(a.ss_within, b.ss_within, rtol=1e-12)

    def test_design_passthrough(self, worked_example):
        from pyanova.anova import AnovaDesign
        design = AnovaDesign.from_groups(worked_example)
        result = anova_oneway(design)
        assert result.design is design


class TestOneWayBalanced:
    """3-group balanced design with clear differences."""

    def test_table_structure(self, oneway_balanced):
        y, group = oneway_balanced
        table = anova_oneway(y, group).table
        assert len(table) == 2
        assert table[0].term == 'Between'
        assert table[1].term == 'Within'

    def test_degrees_of_freedom(self, oneway_balanced):
        y, group = oneway_balanced
        result = anova_oneway(y, group)
        assert result.table[0].df == 2    # k - 1
        assert result.table[1].df == 27   # n - k

    def test_significant_effect(self, oneway_balanced):
        """Groups have means 10, 15, 20; should be highly significant."""
        y, group = oneway_balanced
        result = anova_oneway(y, group)
        assert result.p_value < 0.001

    def test_mean_sq_computation(self, oneway_balanced):
        y, group = oneway_balanced
        result = anova_oneway(y, group)
        for row in result.table:
            assert_allclose(row.mean_sq, row.sum_sq / row.df, rtol=1e-12)

    def test_f_is_ms_ratio(self, oneway_balanced):
        y, group = oneway_balanced
        result = anova_oneway(y, group)
        assert_allclose(
            result.f_value, result.ms_between / result.ms_within, rtol=1e-12
        )

    def test_within_row_has_no_f(self, oneway_balanced):
        y, group = oneway_balanced
        result = anova_oneway(y, group)
        assert result.table[1].f_value is None
        assert result.table[1].p_value is None

    def test_matches_scipy(self, oneway_balanced):
        y, group = oneway_balanced
        result = anova_oneway(y, group)
        ref = sp_stats.f_oneway(*(y[group == g] for g in ('A', 'B', 'C')))
        assert_allclose(result.f_value, ref.statistic, rtol=1e-10)
        assert_allclose(result.p_value, ref.pvalue, rtol=1e-6)


class TestPartitionProperties:
    """Identities that hold for every dataset."""

    @pytest.fixture(params=['oneway_balanced', 'oneway_unbalanced',
                            'oneway_no_effect', 'oneway_two_groups'])
    def dataset(self, request):
        return request.getfixturevalue(request.param)

    def test_additivity(self, dataset):
        y, group = dataset
        result = anova_oneway(y, group)
        assert_allclose(
            result.ss_between + result.ss_within, result.ss_total, rtol=1e-9
        )

    def test_ss_total_direct(self, dataset):
        y, group = dataset
        result = anova_oneway(y, group)
        assert_allclose(result.ss_total, np.sum((y - np.mean(y)) ** 2), rtol=1e-10)

    def test_df_sum(self, dataset):
        y, group = dataset
        result = anova_oneway(y, group)
        assert result.df_between + result.df_within == len(y) - 1

    def test_non_negative(self, dataset):
        y, group = dataset
        result = anova_oneway(y, group)
        assert result.ss_between >= 0
        assert result.ss_within >= 0
        assert result.f_value >= 0
        assert 0.0 <= result.p_value <= 1.0

    def test_matches_scipy(self, dataset):
        y, group = dataset
        result = anova_oneway(y, group)
        samples = [y[group == g] for g in dict.fromkeys(group.tolist())]
        ref = sp_stats.f_oneway(*samples)
        assert_allclose(result.f_value, ref.statistic, rtol=1e-6)


class TestOneWayUnbalanced:
    """3-group unbalanced design (n=5, 10, 15)."""

    def test_degrees_of_freedom(self, oneway_unbalanced):
        y, group = oneway_unbalanced
        result = anova_oneway(y, group)
        assert result.df_between == 2
        assert result.df_within == 27

    def test_group_sizes(self, oneway_unbalanced):
        y, group = oneway_unbalanced
        result = anova_oneway(y, group)
        assert [g.n for g in result.groups] == [5, 10, 15]


class TestOneWayTwoGroups:
    """2-group ANOVA should match F-test from t-test."""

    def test_f_equals_t_squared(self, oneway_two_groups):
        """For 2 groups: F = t^2."""
        y, group = oneway_two_groups
        result = anova_oneway(y, group)

        mask_ctrl = group == 'control'
        t_stat, t_p = sp_stats.ttest_ind(y[mask_ctrl], y[~mask_ctrl])

        assert_allclose(result.f_value, t_stat ** 2, rtol=1e-8)
        assert_allclose(result.p_value, t_p, rtol=1e-8)


class TestOneWayNoEffect:

    def test_not_significant(self, oneway_no_effect):
        y, group = oneway_no_effect
        result = anova_oneway(y, group)
        # fixed seed, so deterministic
        assert result.p_value > 0.01

    def test_identical_group_means(self, equal_means):
        result = anova_oneway(equal_means)
        assert result.ss_between == 0.0
        assert result.f_value == 0.0
        assert result.p_value == pytest.approx(1.0)
        assert not result.reject_null(0.05)


class TestZeroWithinVariance:
    """Constant-valued groups: documented sentinel, never NaN."""

    def test_infinite_f(self):
        data = {'a': [1.0, 1.0, 1.0], 'b': [2.0, 2.0], 'c': [5.0, 5.0, 5.0]}
        with pytest.warns(RuntimeWarning, match="zero within-group variance"):
            result = anova_oneway(data)
        assert result.ss_within == 0.0
        assert result.f_value == math.inf
        assert result.p_value == 0.0
        assert result.reject_null(0.05)
        assert result.eta_squared == 1.0
        assert result.omega_squared == 0.0
        assert result._result.has_warning("zero within-group variance")

    def test_inexact_constant_groups(self):
        """0.1 is not exactly representable; round-off must not leak into F."""
        data = {'a': [0.1, 0.1, 0.1], 'b': [0.7, 0.7, 0.7]}
        with pytest.warns(RuntimeWarning):
            result = anova_oneway(data)
        assert result.f_value == math.inf
        assert result.p_value == 0.0

    def test_all_identical(self):
        data = {'a': [3.0, 3.0], 'b': [3.0, 3.0, 3.0]}
        with pytest.warns(RuntimeWarning, match="all observations are identical"):
            result = anova_oneway(data)
        assert result.f_value == 0.0
        assert result.p_value == 1.0
        assert not math.isnan(result.eta_squared)
        assert not math.isnan(result.omega_squared)


class TestSingleObservationGroups:

    def test_allowed_with_warning(self):
        data = {'a': [1.0, 2.0, 3.0], 'b': [10.0]}
        with pytest.warns(UserWarning, match="single observation"):
            result = anova_oneway(data)
        assert result.df_within == 2
        assert result.groups[1].sum_sq == 0.0
        assert math.isnan(result.groups[1].variance)
        assert any("single observation" in w for w in result.warnings)


class TestErrors:

    def test_single_group(self):
        with pytest.raises(InvalidInputError, match="at least 2 groups"):
            anova_oneway({'only': [1.0, 2.0, 3.0]})

    def test_single_group_arrays(self):
        with pytest.raises(InvalidInputError):
            anova_oneway([1.0, 2.0, 3.0], ['A', 'A', 'A'])

    def test_empty_mapping(self):
        with pytest.raises(InvalidInputError, match="empty"):
            anova_oneway({})

    def test_empty_pairs(self):
        with pytest.raises(InvalidInputError, match="empty"):
            anova_oneway([])

    def test_empty_group(self):
        with pytest.raises(InvalidInputError, match="0 observations"):
            anova_oneway({'a': [1.0, 2.0], 'b': []})

    @pytest.mark.parametrize("bad", [float('nan'), float('inf'), -float('inf')])
    def test_non_finite(self, bad):
        with pytest.raises(InvalidInputError, match="non-finite"):
            anova_oneway({'a': [1.0, 2.0], 'b': [3.0, bad]})

    def test_one_observation_per_group_is_degenerate(self):
        """k groups, N = k observations -> df_within = 0."""
        with pytest.raises(DegenerateDesignError) as exc_info:
            anova_oneway({'a': [1.0], 'b': [2.0], 'c': [3.0]})
        err = exc_info.value
        assert err.n_obs == 3
        assert err.n_groups == 3
        assert err.df_within == 0

    def test_errors_share_base_class(self):
        for data in ({'only': [1.0, 2.0]}, {'a': [1.0], 'b': [2.0]}):
            with pytest.raises(ValidationError):
                anova_oneway(data)
            with pytest.raises(PyAnovaError):
                anova_oneway(data)

    def test_not_iterable(self):
        with pytest.raises(InvalidInputError):
            anova_oneway(42)

    def test_string_is_not_pairs(self):
        with pytest.raises(InvalidInputError):
            anova_oneway("ab")


class TestEffectSizes:

    def test_eta_squared_formula(self, worked_example):
        result = anova_oneway(worked_example)
        assert_allclose(result.eta_squared, 564.6666666666667 / 630.9166666666667,
                        rtol=1e-12)

    def test_omega_squared_formula(self, worked_example):
        result = anova_oneway(worked_example)
        expected = (
            (result.ss_between - result.df_between * result.ms_within)
            / (result.ss_total + result.ms_within)
        )
        assert_allclose(result.omega_squared, expected, rtol=1e-12)
        assert result.omega_squared < result.eta_squared

    def test_eta_squared_between_0_and_1(self, oneway_balanced):
        y, group = oneway_balanced
        result = anova_oneway(y, group)
        assert 0 <= result.eta_squared <= 1


class TestMetadata:

    def test_n_obs_and_groups(self, oneway_balanced):
        y, group = oneway_balanced
        result = anova_oneway(y, group)
        assert result.n_obs == 30
        assert result.n_groups == 3

    def test_info(self, worked_example):
        result = anova_oneway(worked_example)
        assert result.info['design_type'] == 'oneway'
        assert result.info['distribution'] == 'scipy'
        assert result.info['levels'] == ('pursuit', 'flight', 'substance')
        assert result.backend_name == 'cpu'

    def test_timing_sections(self, worked_example):
        result = anova_oneway(worked_example)
        for key in ('total_seconds', 'validate', 'sum_of_squares', 'distribution'):
            assert key in result.timing
            assert result.timing[key] >= 0.0

    def test_no_warnings_for_clean_data(self, worked_example):
        result = anova_oneway(worked_example)
        assert result.warnings == ()

    def test_repr(self, worked_example):
        text = repr(anova_oneway(worked_example))
        assert 'AnovaSolution' in text
        assert 'k=3' in text


class TestLargeOffset:
    """Spread of ~1 on an offset of 1e9: deviation forms stay accurate."""

    def test_additivity(self, large_offset):
        y, group = large_offset
        result = anova_oneway(y, group)
        assert_allclose(
            result.ss_between + result.ss_within, result.ss_total, rtol=1e-6
        )

    def test_matches_scipy(self, large_offset):
        y, group = large_offset
        result = anova_oneway(y, group)
        ref = sp_stats.f_oneway(*(y[group == g] for g in ('x', 'y', 'z')))
        assert_allclose(result.f_value, ref.statistic, rtol=1e-6)
        assert result.p_value < 0.001
