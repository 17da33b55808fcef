"""Unit tests for TRX denomination helpers."""

from decimal import Decimal

import pytest

from hippobreeds_deployments.units import from_sun, to_sun


class TestToSun:
    @pytest.mark.parametrize(
        "trx,expected",
        [
            (1, 1_000_000),
            ("100", 100_000_000),
            ("699.420", 699_420_000),
            (Decimal("0.000001"), 1),
            (0, 0),
        ],
    )
    def test_converts(self, trx, expected):
        assert to_sun(trx) == expected

    def test_rejects_sub_sun_precision(self):
        with pytest.raises(ValueError, match="not a whole number of sun"):
            to_sun("0.0000001")


class TestFromSun:
    def test_converts(self):
        assert from_sun(1_500_000) == Decimal("1.5")

    def test_default_deploy_fee_limit_is_100_trx(self):
        assert from_sun(100_000_000) == 100
