"""
Deployment runner.

Resolves the artifact and signing key for one contract, hands them to the
chain client and turns the outcome into a DeploymentResult. There is no
retry: each call submits a fresh creation transaction.
"""

from pathlib import Path
from typing import Any, Callable, Union

from clashdeploy import utils
from clashdeploy.artifacts import load_artifact
from clashdeploy.config import DEFAULT_ARTIFACTS_DIR, configuration_warnings
from clashdeploy.errors import ConfigurationError
from clashdeploy.evm import EVMClient
from clashdeploy.models import DeploymentResult, NetworkProfile

ClientFactory = Callable[[NetworkProfile], Any]


def deploy(
    contract_name: str,
    profile: NetworkProfile,
    artifacts_dir: Union[str, Path] = DEFAULT_ARTIFACTS_DIR,
    client_factory: ClientFactory = EVMClient,
) -> DeploymentResult:
    """
    Deploy a constructor-less contract and wait for confirmation.

    Args:
        contract_name: Name of the compiled contract (e.g., "ColorClash")
        profile: Target network
        artifacts_dir: Hardhat artifacts directory
        client_factory: Builds the chain client for the profile

    Returns:
        DeploymentResult; success is False when the chain side failed

    Raises:
        ConfigurationError: If the credential or artifact is unusable.
            Nothing has been sent to the network in that case.
    """
    profile.credential.require()
    artifact = load_artifact(contract_name, artifacts_dir)

    for warning in configuration_warnings(profile):
        utils.warn(warning)

    utils.info(f"Deploying {artifact.contract_name} to {profile.name} ({profile.rpc_url})")

    try:
        client = client_factory(profile)
        with profile.credential.acquire() as private_key:
            receipt = client.deploy_contract(artifact, private_key)
    except ConfigurationError:
        raise
    except Exception as e:
        return DeploymentResult(
            success=False,
            contract_name=contract_name,
            network=profile.name,
            error=str(e) or type(e).__name__,
        )

    return DeploymentResult(
        success=True,
        contract_name=contract_name,
        network=profile.name,
        contract_address=receipt["contract_address"],
        transaction_hash=receipt.get("transaction_hash"),
        block_number=receipt.get("block_number"),
        gas_used=receipt.get("gas_used"),
    )
