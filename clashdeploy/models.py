"""Data models for Clashdeploy."""

import os
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional

from clashdeploy.errors import ConfigurationError


@dataclass(frozen=True)
class CredentialRef:
    """Reference to a signing key held in an environment variable.

    Only the variable name is kept; the key itself is read on demand.
    """
    env_var: str
    source: Mapping[str, str] = field(default_factory=lambda: os.environ, repr=False, compare=False)

    def is_set(self) -> bool:
        """Return True if the variable holds a non-blank value."""
        return bool(self.source.get(self.env_var, "").strip())

    def require(self) -> None:
        """Check that the key is present and well formed, without keeping it."""
        with self.acquire():
            pass

    @contextmanager
    def acquire(self) -> Iterator[bytearray]:
        """
        Yield the private key as a 32-byte bytearray, zeroed on exit.

        Raises:
            ConfigurationError: If the variable is unset, empty or not a
                32-byte hex string
        """
        raw = self.source.get(self.env_var, "").strip()
        if not raw:
            raise ConfigurationError(
                f"Credential {self.env_var} is not set; refusing to deploy."
            )
        if raw.startswith("0x"):
            raw = raw[2:]

        try:
            key = bytearray.fromhex(raw)
        except ValueError:
            raise ConfigurationError(f"Credential {self.env_var} is not a valid hex string.") from None

        try:
            if len(key) != 32:
                raise ConfigurationError(
                    f"Credential {self.env_var} must be 32 bytes (64 hex characters)."
                )
            yield key
        finally:
            for i in range(len(key)):
                key[i] = 0


@dataclass(frozen=True)
class ExplorerConfig:
    """Block explorer verification endpoint."""
    network: str
    chain_id: int
    api_url: str
    browser_url: str
    api_key_env: Optional[str] = None
    placeholder_key: Optional[str] = None

    def address_url(self, address: str) -> str:
        return f"{self.browser_url.rstrip('/')}/address/{address}"


@dataclass(frozen=True)
class NetworkProfile:
    """Everything needed to reach and sign for one network."""
    name: str
    rpc_url: str
    credential: CredentialRef
    chain_id: Optional[int] = None
    explorer: Optional[ExplorerConfig] = None

    @property
    def explorer_api_url(self) -> Optional[str]:
        return self.explorer.api_url if self.explorer else None

    @property
    def explorer_browser_url(self) -> Optional[str]:
        return self.explorer.browser_url if self.explorer else None


@dataclass(frozen=True)
class ContractArtifact:
    """Compiled contract as emitted by the Hardhat toolchain."""
    contract_name: str
    abi: List[Dict[str, Any]]
    bytecode: str
    source_name: Optional[str] = None


@dataclass
class DeploymentResult:
    """Outcome of a single deployment attempt."""
    success: bool
    contract_name: str
    network: str
    contract_address: Optional[str] = None
    transaction_hash: Optional[str] = None
    block_number: Optional[int] = None
    gas_used: Optional[int] = None
    error: Optional[str] = None
