"""Unit tests for network profile tables and lookup."""

import json
from dataclasses import FrozenInstanceError, asdict

import pytest

from hippobreeds_deployments.constants import LEGACY_NETWORK_CONFIG, NETWORK_CONFIG
from hippobreeds_deployments.exceptions import (
    NetworkClientError,
    ProfileNotFoundError,
    SigningKeyMissingError,
)
from hippobreeds_deployments.profiles import (
    build_network_profiles,
    compiler_settings,
    get_profile,
    get_table,
    load_network_profiles,
    profile_names,
    resolve_signing_key,
)
from hippobreeds_deployments.types import NetworkProfile


class TestBuildNetworkProfiles:
    """Test the build_network_profiles function."""

    def test_builds_all_tronbox_profiles(self):
        profiles = build_network_profiles(NETWORK_CONFIG)

        assert profile_names(profiles) == ["mainnet", "shasta", "nile", "development"]

    def test_builds_legacy_profiles(self):
        profiles = build_network_profiles(LEGACY_NETWORK_CONFIG)

        assert profile_names(profiles) == ["shasta", "mainnet"]
        for profile in profiles.values():
            assert profile.resource_consumption_percent == 30
            assert profile.fee_limit == 1_000_000_000
            assert profile.network_id == "*"
            assert profile.signing_key_source == "env:PRIVATE_KEY"

    def test_tronbox_profile_values(self):
        profiles = build_network_profiles(NETWORK_CONFIG)

        nile = profiles["nile"]
        assert nile.endpoint_url == "https://nile.trongrid.io"
        assert nile.signing_key_source == "env:PRIVATE_KEY_NILE"
        assert nile.fee_limit == 1_000_000_000
        assert nile.resource_consumption_percent == 100
        assert nile.network_id == "3"

        assert profiles["mainnet"].network_id == "1"
        assert profiles["shasta"].resource_consumption_percent == 50
        assert profiles["development"].resource_consumption_percent == 0

    def test_default_local_port(self):
        profiles = build_network_profiles(NETWORK_CONFIG)

        assert profiles["development"].endpoint_url == "http://127.0.0.1:9090"

    def test_local_port_override(self):
        profiles = build_network_profiles(NETWORK_CONFIG, host_port="8090")

        assert profiles["development"].endpoint_url == "http://127.0.0.1:8090"
        # Remote endpoints are unaffected
        assert profiles["nile"].endpoint_url == "https://nile.trongrid.io"

    def test_defaults_to_tronbox_table(self):
        assert dict(build_network_profiles()) == dict(build_network_profiles(NETWORK_CONFIG))

    def test_mapping_is_read_only(self):
        profiles = build_network_profiles()

        with pytest.raises(TypeError):
            profiles["evil"] = profiles["nile"]  # type: ignore[index]

    def test_records_are_frozen(self):
        profile = build_network_profiles()["nile"]

        with pytest.raises(FrozenInstanceError):
            profile.fee_limit = 1  # type: ignore[misc]


class TestLoadNetworkProfiles:
    """Test the load_network_profiles function."""

    def test_reads_host_port_from_environment(self):
        profiles = load_network_profiles(environ={"HOST_PORT": "18090"})

        assert profiles["development"].endpoint_url == "http://127.0.0.1:18090"

    def test_empty_host_port_uses_default(self):
        profiles = load_network_profiles(environ={"HOST_PORT": ""})

        assert profiles["development"].endpoint_url == "http://127.0.0.1:9090"

    def test_selects_legacy_table(self):
        profiles = load_network_profiles("legacy", environ={})

        assert set(profiles) == {"shasta", "mainnet"}

    def test_unknown_table_raises(self):
        with pytest.raises(ValueError, match="Unknown network table"):
            load_network_profiles("nope", environ={})


class TestGetProfile:
    """Test the get_profile function."""

    def test_returns_profile(self):
        profiles = build_network_profiles()

        profile = get_profile("shasta", profiles)

        assert isinstance(profile, NetworkProfile)
        assert profile.endpoint_url == "https://api.shasta.trongrid.io"

    def test_same_name_twice_is_byte_identical(self):
        first = get_profile("nile", build_network_profiles())
        second = get_profile("nile", build_network_profiles())

        assert first == second
        assert json.dumps(asdict(first), sort_keys=True) == json.dumps(
            asdict(second), sort_keys=True
        )

    def test_unknown_profile_raises_lookup_error(self):
        profiles = build_network_profiles()

        with pytest.raises(ProfileNotFoundError) as exc_info:
            get_profile("testnet-z", profiles)

        assert "testnet-z" in str(exc_info.value)
        assert "nile" in str(exc_info.value)
        assert not isinstance(exc_info.value, NetworkClientError)

    def test_legacy_table_has_no_nile(self):
        with pytest.raises(ProfileNotFoundError):
            get_profile("nile", load_network_profiles("legacy", environ={}))


class TestResolveSigningKey:
    """Test the resolve_signing_key function."""

    def test_reads_key_from_environment(self):
        profile = build_network_profiles()["nile"]

        key = resolve_signing_key(profile, {"PRIVATE_KEY_NILE": "abc123"})

        assert key == "abc123"

    def test_strips_whitespace(self):
        profile = build_network_profiles()["nile"]

        assert resolve_signing_key(profile, {"PRIVATE_KEY_NILE": " abc123\n"}) == "abc123"

    def test_missing_key_raises(self):
        profile = build_network_profiles()["mainnet"]

        with pytest.raises(SigningKeyMissingError, match="PRIVATE_KEY_MAINNET"):
            resolve_signing_key(profile, {})

    def test_empty_key_raises(self):
        profile = build_network_profiles()["shasta"]

        with pytest.raises(SigningKeyMissingError):
            resolve_signing_key(profile, {"PRIVATE_KEY_SHASTA": ""})

    def test_each_network_uses_its_own_variable(self):
        profiles = build_network_profiles()
        environ = {"PRIVATE_KEY_SHASTA": "shasta-key"}

        assert resolve_signing_key(profiles["shasta"], environ) == "shasta-key"
        with pytest.raises(SigningKeyMissingError):
            resolve_signing_key(profiles["nile"], environ)

    def test_development_key_is_inline(self):
        profile = build_network_profiles()["development"]

        assert resolve_signing_key(profile, {}) == "0" * 63 + "1"

    def test_unknown_scheme_raises(self):
        profile = NetworkProfile(
            name="odd",
            endpoint_url="http://localhost",
            signing_key_source="vault:secret/tron",
            fee_limit=1,
            resource_consumption_percent=0,
            network_id="*",
        )

        with pytest.raises(ValueError, match="Unknown signing key source"):
            resolve_signing_key(profile, {})


class TestNetworkProfileValidation:
    """Test NetworkProfile construction checks."""

    @pytest.mark.parametrize("percent", [-1, 101])
    def test_rejects_out_of_range_percent(self, percent):
        with pytest.raises(ValueError, match="between 0 and 100"):
            NetworkProfile(
                name="bad",
                endpoint_url="http://localhost",
                signing_key_source="env:KEY",
                fee_limit=1,
                resource_consumption_percent=percent,
                network_id="*",
            )


class TestCompilerSettings:
    """Test the compiler_settings function."""

    def test_tronbox_compiler_settings(self):
        solc = compiler_settings("tronbox")

        assert solc.optimizer_enabled is True
        assert solc.optimizer_runs == 200
        assert solc.evm_version == "istanbul"
        assert solc.version is None

    def test_legacy_compiler_settings(self):
        solc = compiler_settings("legacy")

        assert solc.version == "0.8.18"
        assert solc.optimizer_runs == 200
        assert solc.evm_version is None

    def test_legacy_table_paths(self):
        assert get_table("legacy")["paths"]["artifacts"] == "./build/contracts"
