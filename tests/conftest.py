"""Shared fixtures for Clashdeploy tests."""

import json

import pytest

from clashdeploy.errors import TransactionError

# Well-known Hardhat development account #0; never holds real funds.
TEST_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_KEY_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

# Creation code that stores a 10-byte runtime returning 42.
RUNTIME_CODE = "602a60505260206050f3"
CREATION_CODE = "0x600a600c600039600a6000f3" + RUNTIME_CODE


def write_artifact(root, contract_name, bytecode=CREATION_CODE, abi=None):
    folder = root / "contracts" / f"{contract_name}.sol"
    folder.mkdir(parents=True, exist_ok=True)
    artifact = {
        "_format": "hh-sol-artifact-1",
        "contractName": contract_name,
        "sourceName": f"contracts/{contract_name}.sol",
        "abi": abi if abi is not None else [],
        "bytecode": bytecode,
        "deployedBytecode": "0x" + RUNTIME_CODE,
    }
    path = folder / f"{contract_name}.json"
    path.write_text(json.dumps(artifact), encoding="utf-8")
    return path


@pytest.fixture
def artifacts_dir(tmp_path):
    root = tmp_path / "artifacts"
    write_artifact(root, "ColorClash")
    write_artifact(root, "RedVsBlue")
    return root


@pytest.fixture
def environ():
    return {
        "WALLET_KEY": TEST_KEY,
        "MAINNET_KEY": TEST_KEY,
        "ARBISCAN_API_KEY": "explorer-secret",
    }


class StubClient:
    """Chain client double that hands out a fresh address per deployment."""

    def __init__(self, profile, fail_with=None, deployments=None):
        self.profile = profile
        self.fail_with = fail_with
        self.deployments = deployments if deployments is not None else []
        self.keys = []

    def deploy_contract(self, artifact, private_key):
        self.keys.append(private_key)
        if self.fail_with is not None:
            raise self.fail_with
        self.deployments.append(artifact.contract_name)
        index = len(self.deployments)
        return {
            "contract_address": "0x" + f"{index:040x}",
            "transaction_hash": "0x" + f"{index:064x}",
            "block_number": index,
            "gas_used": 21000,
        }


@pytest.fixture
def stub_factory():
    """Factory building StubClients that share a deployment log."""
    deployments = []
    clients = []

    def factory(profile):
        client = StubClient(profile, deployments=deployments)
        clients.append(client)
        return client

    factory.deployments = deployments
    factory.clients = clients
    return factory


@pytest.fixture
def rejecting_factory():
    clients = []

    def factory(profile):
        client = StubClient(profile, fail_with=TransactionError("Failed to send transaction to RPC: insufficient funds"))
        clients.append(client)
        return client

    factory.clients = clients
    return factory
