"""Shared pytest fixtures for hippobreeds-deployments tests."""

import hashlib
import shutil
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping

import pytest
import responses

from hippobreeds_deployments.types import NetworkProfile

NODE_URL = "http://tron-node.example.com"
CONTRACT_HEX_ADDRESS = "41e552f6487585c2b58bc2c9bb4492bc1f17132cd0"
RAW_DATA_HEX = "0a02" * 16
TXID = hashlib.sha256(bytes.fromhex(RAW_DATA_HEX)).hexdigest()

# Private key 1; its account id is 0x7E5F4552091A69125d5DfCb7b8C2659029395Bdf
DEV_PRIVATE_KEY = "0" * 63 + "1"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def artifact_sample(fixtures_dir: Path) -> Path:
    """Return path to the sample HippoBreeds artifact."""
    return fixtures_dir / "build" / "contracts" / "HippoBreeds.json"


@pytest.fixture
def project_root(tmp_path: Path, artifact_sample: Path) -> Path:
    """Create a project directory containing the compiled artifact."""
    root = tmp_path / "project"
    artifacts_dir = root / "build" / "contracts"
    artifacts_dir.mkdir(parents=True)
    shutil.copy(artifact_sample, artifacts_dir / "HippoBreeds.json")
    return root


@pytest.fixture
def result_path(project_root: Path) -> Path:
    """Return where a deployment writes its result inside project_root."""
    return project_root / "src" / "abis" / "contractAddress.json"


@pytest.fixture
def dev_private_key() -> str:
    return DEV_PRIVATE_KEY


@pytest.fixture
def node_profile() -> NetworkProfile:
    """A profile pointing at the mocked node."""
    return NetworkProfile(
        name="testnode",
        endpoint_url=NODE_URL,
        signing_key_source="env:PRIVATE_KEY_TESTNODE",
        fee_limit=1_000_000_000,
        resource_consumption_percent=100,
        network_id="3",
    )


@pytest.fixture
def node_profiles(node_profile: NetworkProfile) -> Mapping[str, NetworkProfile]:
    return MappingProxyType({node_profile.name: node_profile})


@pytest.fixture
def node_environ() -> Dict[str, str]:
    return {"PRIVATE_KEY_TESTNODE": DEV_PRIVATE_KEY}


@pytest.fixture
def mocked_node():
    """Activate responses for the duration of a test."""
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


def deploy_transaction() -> Dict[str, Any]:
    """Unsigned creation transaction as returned by /wallet/deploycontract."""
    return {
        "visible": True,
        "txID": TXID,
        "contract_address": CONTRACT_HEX_ADDRESS,
        "raw_data": {
            "contract": [{"type": "CreateSmartContract"}],
            "fee_limit": 100_000_000,
        },
        "raw_data_hex": RAW_DATA_HEX,
    }


def confirmed_info(**overrides: Any) -> Dict[str, Any]:
    """Transaction info for a confirmed contract creation."""
    info = {
        "id": TXID,
        "blockNumber": 41234567,
        "contract_address": CONTRACT_HEX_ADDRESS,
        "receipt": {"energy_usage_total": 152340, "result": "SUCCESS"},
    }
    info.update(overrides)
    return info


@pytest.fixture
def successful_deployment(mocked_node):
    """Register node responses for a deployment that succeeds after one pending poll."""
    mocked_node.add(responses.POST, f"{NODE_URL}/wallet/deploycontract", json=deploy_transaction())
    mocked_node.add(
        responses.POST,
        f"{NODE_URL}/wallet/broadcasttransaction",
        json={"result": True, "txid": TXID},
    )
    mocked_node.add(responses.POST, f"{NODE_URL}/wallet/gettransactioninfobyid", json={})
    mocked_node.add(
        responses.POST, f"{NODE_URL}/wallet/gettransactioninfobyid", json=confirmed_info()
    )
    return mocked_node
