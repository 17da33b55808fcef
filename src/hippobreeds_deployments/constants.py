"""Configuration constants for hippobreeds-deployments."""

CONTRACT_NAME = "HippoBreeds"

# Fixed locations relative to the project root
ARTIFACTS_DIR = ("build", "contracts")
RESULT_FILE = ("src", "abis", "contractAddress.json")

DEFAULT_HOST_PORT = "9090"
DEFAULT_REQUEST_TIMEOUT = 30  # seconds, per HTTP request
DEFAULT_CONFIRMATION_TIMEOUT = 60
DEFAULT_POLL_INTERVAL = 3

API_KEY_ENV = "TRON_PRO_API_KEY"
API_KEY_HEADER = "TRON-PRO-API-KEY"

# Per-call limits passed to contract().new(); fee_limit is in sun (100 TRX)
DEFAULT_DEPLOYMENT_OPTIONS = {
    "fee_limit": 100_000_000,
    "call_value": 0,
    "user_fee_percentage": 1,
    "origin_energy_limit": 10_000_000,
}

# Signing key sources are "env:<VAR>" or "inline:<hex>"
# "{host_port}" in full_host is substituted when profiles are built
NETWORK_CONFIG = {
    "networks": {
        "mainnet": {
            "private_key": "env:PRIVATE_KEY_MAINNET",
            "user_fee_percentage": 100,
            "fee_limit": 1000 * 10**6,
            "full_host": "https://api.trongrid.io",
            "network_id": "1",
        },
        "shasta": {
            "private_key": "env:PRIVATE_KEY_SHASTA",
            "user_fee_percentage": 50,
            "fee_limit": 1000 * 10**6,
            "full_host": "https://api.shasta.trongrid.io",
            "network_id": "2",
        },
        "nile": {
            "private_key": "env:PRIVATE_KEY_NILE",
            "user_fee_percentage": 100,
            "fee_limit": 1000 * 10**6,
            "full_host": "https://nile.trongrid.io",
            "network_id": "3",
        },
        "development": {
            "private_key": "inline:" + "0" * 63 + "1",
            "user_fee_percentage": 0,
            "fee_limit": 1000 * 10**6,
            "full_host": "http://127.0.0.1:{host_port}",
            "network_id": "9",
        },
    },
    "solc": {
        "optimizer": {"enabled": True, "runs": 200},
        "evm_version": "istanbul",
    },
}

LEGACY_NETWORK_CONFIG = {
    "networks": {
        "shasta": {
            "private_key": "env:PRIVATE_KEY",
            "user_fee_percentage": 30,
            "fee_limit": 1_000_000_000,
            "full_host": "https://api.shasta.trongrid.io",
            "network_id": "*",  # match any network id
        },
        "mainnet": {
            "private_key": "env:PRIVATE_KEY",
            "user_fee_percentage": 30,
            "fee_limit": 1_000_000_000,
            "full_host": "https://api.trongrid.io",
            "network_id": "*",
        },
    },
    "solc": {
        "version": "0.8.18",
        "optimizer": {"enabled": True, "runs": 200},
    },
    "paths": {
        "sources": "./contracts",
        "tests": "./test",
        "artifacts": "./build/contracts",
    },
}

NETWORK_TABLES = {
    "tronbox": NETWORK_CONFIG,
    "legacy": LEGACY_NETWORK_CONFIG,
}

DEFAULT_TABLE = "tronbox"
DEFAULT_NETWORK = "nile"
