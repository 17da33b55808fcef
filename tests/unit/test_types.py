"""Unit tests for data types."""

import pytest

from hippobreeds_deployments.types import DeploymentOptions, DeploymentResult


class TestDeploymentOptions:
    """Test DeploymentOptions defaults and validation."""

    def test_defaults(self):
        options = DeploymentOptions()

        assert options.fee_limit == 100_000_000
        assert options.call_value == 0
        assert options.user_fee_percentage == 1
        assert options.origin_energy_limit == 10_000_000

    @pytest.mark.parametrize("percentage", [0, 50, 100])
    def test_accepts_percentages_in_range(self, percentage):
        assert DeploymentOptions(user_fee_percentage=percentage).user_fee_percentage == percentage

    @pytest.mark.parametrize("percentage", [-1, 101, 500])
    def test_rejects_percentages_out_of_range(self, percentage):
        with pytest.raises(ValueError, match="user_fee_percentage must be between 0 and 100"):
            DeploymentOptions(user_fee_percentage=percentage)


class TestDeploymentResult:
    def test_to_dict(self):
        assert DeploymentResult(address="TAbc").to_dict() == {"address": "TAbc"}
