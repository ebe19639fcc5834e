"""Tests for source_metrics.math.statistics module."""

from source_metrics.math import Statistics


class TestMean:
    def test_mean_empty(self):
        """Mean of empty list is 0."""
        assert Statistics.mean([]) == 0.0

    def test_mean_known(self):
        assert Statistics.mean([1, 2, 3, 4]) == 2.5
        assert isinstance(Statistics.mean([1, 2]), float)


class TestWeightedMean:
    def test_known(self):
        assert Statistics.weighted_mean(2.0, 1, 5.0, 2) == 4.0

    def test_both_weights_zero(self):
        assert Statistics.weighted_mean(3.0, 0, 7.0, 0) == 0.0

    def test_zero_weight_side_is_ignored(self):
        """An empty side never perturbs the other average."""
        value = 0.1 + 0.2
        assert Statistics.weighted_mean(0.0, 0, value, 3) == value
        assert Statistics.weighted_mean(value, 3, 0.0, 0) == value


class TestPercentage:
    def test_known(self):
        assert Statistics.percentage(1, 4) == 25.0

    def test_empty_whole(self):
        assert Statistics.percentage(0, 0) == 0.0
        assert Statistics.percentage(0, 0, empty=100.0) == 100.0

    def test_per_hundred(self):
        assert Statistics.per_hundred(3, 60) == 5.0
        assert Statistics.per_hundred(3, 0) == 0.0


class TestDistribution:
    def test_empty(self):
        result = Statistics.distribution([])
        assert result["count"] == 0
        assert result["max"] == 0.0

    def test_known(self):
        result = Statistics.distribution([1, 2, 3, 4, 10])
        assert result["count"] == 5
        assert result["mean"] == 4.0
        assert result["median"] == 3.0
        assert result["max"] == 10.0
        assert 4.0 < result["p90"] <= 10.0
