"""
Configuration module for Clashdeploy.
Stores RPC endpoints, chain IDs, signing key variables and explorer
endpoints for the supported networks.
Supports environment variables with fallback to defaults.
"""

import os
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple

from clashdeploy.errors import ConfigurationError
from clashdeploy.models import CredentialRef, ExplorerConfig, NetworkProfile

EXPLORER_API_KEY_ENV = "ARBISCAN_API_KEY"
NETWORK_SELECTOR_ENV = "HARDHAT_NETWORK"
ARTIFACTS_DIR_ENV = "ARTIFACTS_DIR"
DEFAULT_ARTIFACTS_DIR = "artifacts"

# Deploy targets: key -> (contract name, output label)
DEPLOY_TARGETS: Dict[str, Tuple[str, str]] = {
    "colors": ("ColorClash", "Colors"),
    "redvsblue": ("RedVsBlue", "RedVsBlue"),
}

# Network definitions. chain_id is None where the network does not pin one;
# the node's own chain ID is then accepted as-is.
# Structure: NETWORKS[name] = {rpc_env, rpc_default, chain_id, credential_env}
NETWORKS: Dict[str, Dict[str, Optional[object]]] = {
    "arbitrumGoerli": {
        "rpc_env": "ARBITRUM_GOERLI_RPC",
        "rpc_default": "https://goerli-rollup.arbitrum.io/rpc",
        "chain_id": 421613,
        "credential_env": "WALLET_KEY",
    },
    "arbitrumOne": {
        "rpc_env": "ARBITRUM_ONE_RPC",
        "rpc_default": "https://arb1.arbitrum.io/rpc",
        "chain_id": None,
        "credential_env": "MAINNET_KEY",
    },
    "arbitrumSepolia": {
        "rpc_env": "ARBITRUM_SEPOLIA_RPC",
        "rpc_default": "https://sepolia-rollup.arbitrum.io/rpc",
        "chain_id": None,
        "credential_env": "WALLET_KEY",
    },
}

# Explorer verification endpoints, kept exactly as declared.
# arbitrumSepolia is declared with chain 421611 and basescan URLs, which does
# not match arbitrumGoerli's 421613; configuration_warnings() reports it.
EXPLORERS: Dict[str, ExplorerConfig] = {
    "base-goerli": ExplorerConfig(
        network="base-goerli",
        chain_id=84531,
        api_url="https://api-goerli.basescan.org/api",
        browser_url="https://goerli.basescan.org",
        placeholder_key="PLACEHOLDER_STRING",
    ),
    "arbitrumGoerli": ExplorerConfig(
        network="arbitrumGoerli",
        chain_id=421613,
        api_url="https://api-goerli.arbiscan.io/api",
        browser_url="https://goerli.arbiscan.io",
        api_key_env=EXPLORER_API_KEY_ENV,
    ),
    "arbitrumOne": ExplorerConfig(
        network="arbitrumOne",
        chain_id=42161,
        api_url="https://api.arbiscan.io/api",
        browser_url="https://arbiscan.io",
        api_key_env=EXPLORER_API_KEY_ENV,
    ),
    "arbitrumSepolia": ExplorerConfig(
        network="arbitrumSepolia",
        chain_id=421611,
        api_url="https://api-sepolia.basescan.org/api",
        browser_url="https://sepolia.basescan.org",
        api_key_env=EXPLORER_API_KEY_ENV,
    ),
}


def get_env(environ: Mapping[str, str], key: str, default: str) -> str:
    """Get environment variable with fallback to default."""
    value = environ.get(key)
    return value if value else default


def build_networks(environ: Optional[Mapping[str, str]] = None) -> Dict[str, NetworkProfile]:
    """
    Assemble every network profile from the static definitions.

    Credentials are not checked here; see resolve_network().

    Args:
        environ: Mapping to read RPC overrides and credentials from
            (defaults to os.environ)

    Returns:
        Dictionary of network name to NetworkProfile
    """
    if environ is None:
        environ = os.environ

    profiles = {}
    for name, definition in NETWORKS.items():
        profiles[name] = NetworkProfile(
            name=name,
            rpc_url=get_env(environ, definition["rpc_env"], definition["rpc_default"]),
            chain_id=definition["chain_id"],
            credential=CredentialRef(definition["credential_env"], environ),
            explorer=EXPLORERS.get(name),
        )
    return profiles


def resolve_network(name: str, environ: Optional[Mapping[str, str]] = None) -> NetworkProfile:
    """
    Get the profile for a network, requiring its signing key to be set.

    Args:
        name: Network name (e.g., "arbitrumSepolia")
        environ: Mapping to read configuration from (defaults to os.environ)

    Returns:
        NetworkProfile for the network

    Raises:
        ConfigurationError: If the network is unknown or its credential
            variable is missing or empty
    """
    profiles = build_networks(environ)
    profile = profiles.get(name)
    if profile is None:
        known = ", ".join(sorted(profiles))
        raise ConfigurationError(f"Unknown network {name!r}. Known networks: {known}")

    if not profile.credential.is_set():
        raise ConfigurationError(
            f"Credential {profile.credential.env_var} for network {name} is not set."
        )
    return profile


def configuration_warnings(profile: NetworkProfile) -> List[str]:
    """
    Report explorer chain IDs that disagree with the network definition.

    The explorer value is never used in place of the network's own chain ID.
    """
    warnings = []
    explorer = profile.explorer
    if explorer is None:
        return warnings

    if profile.chain_id is None:
        warnings.append(
            f"{profile.name}: network pins no chain ID but its explorer declares "
            f"{explorer.chain_id}; the node's chain ID is not verified"
        )
    elif profile.chain_id != explorer.chain_id:
        warnings.append(
            f"{profile.name}: network chain ID {profile.chain_id} differs from "
            f"explorer chain ID {explorer.chain_id}"
        )
    return warnings


def credential_status(profile: NetworkProfile) -> str:
    """Return "set" or "missing" for the network's signing key."""
    return "set" if profile.credential.is_set() else "missing"


def explorer_key_status(explorer: ExplorerConfig, environ: Optional[Mapping[str, str]] = None) -> str:
    """Return "set", "missing" or "placeholder" for an explorer API key."""
    if explorer.placeholder_key is not None:
        return "placeholder"
    if environ is None:
        environ = os.environ
    return "set" if environ.get(explorer.api_key_env or "", "").strip() else "missing"


def get_artifacts_dir(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Get the Hardhat artifacts directory."""
    if environ is None:
        environ = os.environ
    return Path(get_env(environ, ARTIFACTS_DIR_ENV, DEFAULT_ARTIFACTS_DIR))


def get_deploy_target(target: str) -> Tuple[str, str]:
    """
    Get the contract name and output label for a deploy target.

    Raises:
        ConfigurationError: If the target is unknown
    """
    try:
        return DEPLOY_TARGETS[target.lower()]
    except KeyError:
        known = ", ".join(DEPLOY_TARGETS)
        raise ConfigurationError(f"Unknown deploy target {target!r}. Known targets: {known}") from None


def list_networks() -> List[str]:
    """List all available network names."""
    return list(NETWORKS.keys())


def list_explorers() -> List[str]:
    """List all configured explorer names."""
    return list(EXPLORERS.keys())
