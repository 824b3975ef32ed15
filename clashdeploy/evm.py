"""EVM blockchain operations."""

from typing import Any, Dict, Optional
from eth_account import Account
from eth_keys import keys
from web3 import Web3
from web3.exceptions import TimeExhausted

from clashdeploy import utils
from clashdeploy.errors import TransactionError
from clashdeploy.models import ContractArtifact, NetworkProfile


class EVMClient:
    """EVM blockchain client that manages the RPC connection for one network."""

    def __init__(self, profile: NetworkProfile, w3: Optional[Web3] = None):
        """
        Initialize EVM client for a network profile.

        Args:
            profile: Network to connect to
            w3: Pre-built Web3 instance (e.g. a local test chain); when
                omitted an HTTP provider for profile.rpc_url is used

        Raises:
            TransactionError: If the endpoint is unreachable or reports a
                chain ID other than the one the profile pins
        """
        self.profile = profile
        self.rpc_endpoint = profile.rpc_url
        self.w3 = w3 if w3 is not None else self._connect_web3()
        self.chain_id = self._check_chain_id()

    def _connect_web3(self) -> Web3:
        """Return a connected Web3 instance or raise if unreachable."""
        w3 = Web3(Web3.HTTPProvider(self.rpc_endpoint))

        if not w3.is_connected():
            raise TransactionError(f"Failed to connect to RPC endpoint: {self.rpc_endpoint}")

        return w3

    def _check_chain_id(self) -> int:
        try:
            chain_id = self.w3.eth.chain_id
        except Exception as e:
            raise TransactionError(f"Failed to query chain ID from {self.rpc_endpoint}: {e}") from e

        expected = self.profile.chain_id
        if expected is not None and chain_id != expected:
            raise TransactionError(
                f"Chain ID mismatch for {self.profile.name}: "
                f"endpoint reports {chain_id}, expected {expected}"
            )
        utils.info(f"Chain ID: {chain_id}")
        return chain_id

    def deploy_contract(self, artifact: ContractArtifact, private_key: bytearray) -> Dict[str, Any]:
        """
        Sign and send a contract-creation transaction, then wait for its receipt.

        Blocks until the transaction is mined or web3's receipt timeout
        expires. Every call sends a new transaction.

        Args:
            artifact: Compiled contract to deploy
            private_key: 32-byte signing key

        Returns:
            Dictionary with contract_address, transaction_hash, block_number
            and gas_used

        Raises:
            TransactionError: If building, signing, sending or mining fails
        """
        deployer = derive_address(private_key)
        utils.info(f"Deployer: {deployer}")

        transaction = self._build_deploy_transaction(artifact, deployer)
        raw_transaction = self._sign_transaction(transaction, private_key)
        tx_hash = self._send_raw_transaction(raw_transaction)
        utils.info(f"Transaction Hash: {tx_hash}")

        receipt = self._wait_for_receipt(tx_hash)
        contract_address = receipt.get("contractAddress")
        if not contract_address:
            raise TransactionError(f"Receipt for {tx_hash} carries no contract address")

        return {
            "contract_address": Web3.to_checksum_address(contract_address),
            "transaction_hash": tx_hash,
            "block_number": receipt.get("blockNumber"),
            "gas_used": receipt.get("gasUsed"),
        }

    def _build_deploy_transaction(self, artifact: ContractArtifact, deployer: str) -> Dict[str, Any]:
        """Build the creation transaction; gas and fees come from the node."""
        try:
            contract = self.w3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)
            nonce = self.w3.eth.get_transaction_count(deployer, "pending")
            tx_params = {
                "from": deployer,
                "nonce": nonce,
                "chainId": self.chain_id,
            }
            return contract.constructor().build_transaction(tx_params)
        except Exception as e:
            reason = _describe_rpc_error(e, check_server_error=False)
            raise TransactionError(f"Failed to build transaction: {reason}") from e

    def _sign_transaction(self, transaction: Dict[str, Any], private_key: bytearray) -> bytes:
        try:
            signed_txn = Account.sign_transaction(transaction, bytes(private_key))
        except Exception as e:
            raise TransactionError(f"Failed to sign transaction: {e}") from e
        return signed_txn.raw_transaction

    def _send_raw_transaction(self, raw_transaction: bytes) -> str:
        try:
            tx_hash = self.w3.eth.send_raw_transaction(raw_transaction)
        except Exception as e:
            raise TransactionError(f"Failed to send transaction to RPC: {_describe_rpc_error(e)}") from e
        return Web3.to_hex(tx_hash)

    def _wait_for_receipt(self, tx_hash: str) -> Dict[str, Any]:
        """Block until the transaction is mined, using web3's default timeout."""
        try:
            receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash)
        except TimeExhausted as e:
            raise TransactionError(
                f"Transaction {tx_hash} was not mined before the client timed out; "
                "its on-chain outcome is undetermined"
            ) from e
        except Exception as e:
            raise TransactionError(f"Failed to get receipt for {tx_hash}: {e}") from e

        if receipt.get("status") != 1:
            raise TransactionError(f"Deployment transaction {tx_hash} reverted")
        return dict(receipt)


def derive_address(private_key: bytearray) -> str:
    """Derive the checksummed address for a private key."""
    if len(private_key) != 32:
        raise TransactionError("Private key must be 32 bytes (64 hex characters).")
    return keys.PrivateKey(bytes(private_key)).public_key.to_checksum_address()


def _describe_rpc_error(error: Exception, check_server_error: bool = True) -> str:
    """Turn common node rejections into readable messages."""
    message = str(error)
    lowered = message.lower()
    if "insufficient funds" in lowered:
        return f"insufficient funds for gas * price + value ({message})"
    if check_server_error and ("500 server error" in lowered or "internal server error" in lowered):
        return f"RPC endpoint returned 500 Internal Server Error: {message}"
    return message
