"""Tests for the deployment runner, using a stub chain client."""

import pytest
from web3 import Web3

from clashdeploy import config, runner
from clashdeploy.errors import ArtifactError, ConfigurationError


def test_deploy_success(environ, artifacts_dir, stub_factory):
    profile = config.resolve_network("arbitrumSepolia", environ)

    result = runner.deploy("ColorClash", profile, artifacts_dir, client_factory=stub_factory)

    assert result.success
    assert result.error is None
    assert result.contract_name == "ColorClash"
    assert result.network == "arbitrumSepolia"
    assert Web3.is_address(result.contract_address)
    assert result.block_number == 1
    assert stub_factory.deployments == ["ColorClash"]


def test_signing_key_is_zeroed_after_deploy(environ, artifacts_dir, stub_factory):
    profile = config.resolve_network("arbitrumGoerli", environ)

    runner.deploy("RedVsBlue", profile, artifacts_dir, client_factory=stub_factory)

    (key,) = stub_factory.clients[0].keys
    assert len(key) == 32
    assert key == bytearray(32)


def test_redeploy_creates_new_contract(environ, artifacts_dir, stub_factory):
    profile = config.resolve_network("arbitrumSepolia", environ)

    first = runner.deploy("ColorClash", profile, artifacts_dir, client_factory=stub_factory)
    second = runner.deploy("ColorClash", profile, artifacts_dir, client_factory=stub_factory)

    assert first.success and second.success
    assert first.contract_address != second.contract_address
    assert stub_factory.deployments == ["ColorClash", "ColorClash"]


def test_missing_credential_stops_before_network(environ, artifacts_dir, stub_factory):
    profile = config.resolve_network("arbitrumSepolia", environ)
    environ["WALLET_KEY"] = ""

    with pytest.raises(ConfigurationError, match="WALLET_KEY"):
        runner.deploy("ColorClash", profile, artifacts_dir, client_factory=stub_factory)

    assert stub_factory.clients == []


def test_missing_artifact_stops_before_network(environ, artifacts_dir, stub_factory):
    profile = config.resolve_network("arbitrumSepolia", environ)

    with pytest.raises(ArtifactError):
        runner.deploy("Missing", profile, artifacts_dir, client_factory=stub_factory)

    assert stub_factory.clients == []


def test_rejection_produces_failed_result(environ, artifacts_dir, rejecting_factory):
    profile = config.resolve_network("arbitrumOne", environ)

    result = runner.deploy("ColorClash", profile, artifacts_dir, client_factory=rejecting_factory)

    assert not result.success
    assert result.contract_address is None
    assert "insufficient funds" in result.error
    assert rejecting_factory.clients[0].keys[0] == bytearray(32)


def test_unreachable_endpoint_produces_failed_result(environ, artifacts_dir):
    profile = config.resolve_network("arbitrumSepolia", environ)

    def unreachable(profile):
        raise ConnectionError("connection refused")

    result = runner.deploy("ColorClash", profile, artifacts_dir, client_factory=unreachable)

    assert not result.success
    assert result.error == "connection refused"
