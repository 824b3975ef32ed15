"""Command line interface for Clashdeploy."""

from __future__ import annotations

import argparse
import os
import sys
from typing import Callable, Dict, List, Mapping, Optional
from dotenv import load_dotenv

from clashdeploy import __version__, config, runner, utils
from clashdeploy.errors import ConfigurationError, DeployError
from clashdeploy.evm import EVMClient
from clashdeploy.models import DeploymentResult, ExplorerConfig


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="clashdeploy",
        description="Deploy the ColorClash and RedVsBlue contracts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  clashdeploy deploy colors --network arbitrumSepolia
  clashdeploy deploy redvsblue --network arbitrumOne
  HARDHAT_NETWORK=arbitrumGoerli clashdeploy deploy colors
  clashdeploy networks
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    deploy_parser = subparsers.add_parser("deploy", help="Deploy a contract")
    deploy_parser.add_argument("target", choices=sorted(config.DEPLOY_TARGETS), help="Contract to deploy")
    deploy_parser.add_argument(
        "--network",
        help=f"Network name (defaults to ${config.NETWORK_SELECTOR_ENV})",
    )
    deploy_parser.add_argument(
        "--artifacts",
        help=f"Hardhat artifacts directory (defaults to ${config.ARTIFACTS_DIR_ENV} or ./artifacts)",
    )
    deploy_parser.add_argument("--quiet", action="store_true", help="Only print the result line and errors")

    subparsers.add_parser("networks", help="List configured networks and explorers")
    return parser


class ClashdeployCLI:
    """Runs one command against configuration assembled at startup."""

    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        client_factory: Optional[runner.ClientFactory] = None,
    ) -> None:
        self.environ = os.environ if environ is None else environ
        self.client_factory = client_factory or EVMClient
        self.commands: Dict[str, Callable[[argparse.Namespace], int]] = {
            "deploy": self.deploy,
            "networks": self.show_networks,
        }

    def run(self, args: argparse.Namespace) -> int:
        command = self.commands[args.command]
        utils.set_quiet(getattr(args, "quiet", False))
        try:
            return command(args)
        except DeployError as e:
            utils.error(str(e))
            return 1
        except KeyboardInterrupt:
            utils.warn("Interrupted. If the transaction was already sent, its on-chain outcome is undetermined.")
            return 130
        finally:
            utils.set_quiet(False)

    def deploy(self, args: argparse.Namespace) -> int:
        """Deploy one contract and print its address."""
        contract_name, label = config.get_deploy_target(args.target)

        network = args.network or self.environ.get(config.NETWORK_SELECTOR_ENV)
        if not network:
            raise ConfigurationError(
                f"No network selected. Pass --network or set {config.NETWORK_SELECTOR_ENV}."
            )
        profile = config.resolve_network(network, self.environ)
        artifacts_dir = args.artifacts or config.get_artifacts_dir(self.environ)

        result = runner.deploy(contract_name, profile, artifacts_dir, client_factory=self.client_factory)
        return self.report(result, label, profile.explorer)

    def report(self, result: DeploymentResult, label: str, explorer: Optional[ExplorerConfig] = None) -> int:
        """Print the outcome and return the process exit status."""
        if not result.success:
            utils.error(f"Deployment of {result.contract_name} to {result.network} failed: {result.error}")
            return 1

        print(f"{label} Contract Deployed at {result.contract_address}")
        if result.block_number is not None:
            utils.success(f"Mined in block {result.block_number} (gas used: {result.gas_used})")
        if explorer is not None:
            utils.info(f"Explorer: {explorer.address_url(result.contract_address)}")
        return 0

    def show_networks(self, args: argparse.Namespace) -> int:
        """List networks with chain IDs and credential status, never values."""
        profiles = config.build_networks(self.environ)
        print(utils.bold("Networks"))
        for name in config.list_networks():
            profile = profiles[name]
            chain_id = profile.chain_id if profile.chain_id is not None else "-"
            print(
                f"  {name:<16} chain {chain_id!s:<8} {profile.rpc_url}  "
                f"{profile.credential.env_var}: {config.credential_status(profile)}"
            )
            for warning in config.configuration_warnings(profile):
                utils.warn(warning)

        print(utils.bold("Explorers"))
        for name in config.list_explorers():
            explorer = config.EXPLORERS[name]
            print(
                f"  {name:<16} chain {explorer.chain_id!s:<8} {explorer.api_url}  "
                f"key: {config.explorer_key_status(explorer, self.environ)}"
            )
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    load_dotenv()
    args = create_parser().parse_args(argv)
    return ClashdeployCLI().run(args)


if __name__ == "__main__":
    sys.exit(main())
