"""
Command-line interface for hippobreeds-deployments.

Examples:
    Deploy to the Nile testnet (reads $PRIVATE_KEY_NILE, also from .env)::

        hippobreeds-deploy deploy --network nile

    Deploy using the legacy table with a lower fee limit::

        hippobreeds-deploy deploy --table legacy --network shasta --fee-limit 50000000

    Fee limit and user fee percentage default to the selected profile's values.

    Inspect configuration::

        hippobreeds-deploy profiles
        hippobreeds-deploy show-profile development

    Check that the recorded address holds a contract::

        hippobreeds-deploy status --network nile

Exit codes: 0 on success, 1 on a deployment error, 2 on an unknown profile.
"""

import argparse
import json
import logging
import sys
from dataclasses import asdict
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv

from .constants import CONTRACT_NAME, DEFAULT_DEPLOYMENT_OPTIONS, DEFAULT_NETWORK, NETWORK_TABLES
from .deployer import deployment_options, deployment_status, run_deployment
from .exceptions import (
    MalformedResultError,
    NetworkClientError,
    ProfileNotFoundError,
    ResultNotFoundError,
)
from .paths import get_result_path
from .profiles import compiler_settings, get_profile, load_network_profiles
from .units import from_sun

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_DEPLOYMENT_ERROR = 1
EXIT_UNKNOWN_PROFILE = 2

# Deploy limits whose default comes from the selected network profile
PROFILE_OPTIONS = ("fee_limit", "user_fee_percentage")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hippobreeds-deploy",
        description="Deploy the HippoBreeds contract to a TRON network.",
    )
    table_help = "Network table to select profiles from (default: tronbox)"
    parser.add_argument(
        "--table", choices=sorted(NETWORK_TABLES), default="tronbox", help=table_help
    )
    # Also accepted after the subcommand; SUPPRESS keeps a top-level value
    table_parent = argparse.ArgumentParser(add_help=False)
    table_parent.add_argument(
        "--table", choices=sorted(NETWORK_TABLES), default=argparse.SUPPRESS, help=table_help
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Show debug output")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only show errors")

    subparsers = parser.add_subparsers(dest="command", required=True)

    deploy = subparsers.add_parser(
        "deploy", parents=[table_parent], help="Deploy the contract and record its address"
    )
    deploy.add_argument("--network", default=DEFAULT_NETWORK, help="Network profile name")
    deploy.add_argument("--project-root", help="Project directory (default: current directory)")
    deploy.add_argument("--contract", default=CONTRACT_NAME, help="Artifact name to deploy")
    deploy.add_argument(
        "--constructor-args",
        type=json.loads,
        default=[],
        help='Constructor arguments as a JSON array, e.g. \'["Legendary Hippo", "HIPPO", ...]\'',
    )
    for option, default in DEFAULT_DEPLOYMENT_OPTIONS.items():
        deploy.add_argument(
            f"--{option.replace('_', '-')}",
            dest=option,
            type=int,
            default=None,
            help=(
                "(default: from the network profile)"
                if option in PROFILE_OPTIONS
                else f"(default: {default})"
            ),
        )

    subparsers.add_parser("profiles", parents=[table_parent], help="List network profiles")

    show = subparsers.add_parser(
        "show-profile", parents=[table_parent], help="Print a network profile as JSON"
    )
    show.add_argument("name", help="Network profile name")

    status = subparsers.add_parser(
        "status",
        parents=[table_parent],
        help="Check whether the recorded address holds a contract",
    )
    status.add_argument("--network", default=DEFAULT_NETWORK, help="Network profile name")
    status.add_argument("--project-root", help="Project directory (default: current directory)")

    return parser


def _configure_logging(args: argparse.Namespace) -> None:
    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    logging.basicConfig(level=level, format="%(message)s")


def _list_profiles(args: argparse.Namespace) -> int:
    profiles = load_network_profiles(args.table)
    for profile in profiles.values():
        print(
            f"{profile.name:<12} {profile.endpoint_url:<32} "
            f"fee_limit={from_sun(profile.fee_limit)} TRX "
            f"user_fee={profile.resource_consumption_percent}% "
            f"network_id={profile.network_id}"
        )

    solc = compiler_settings(args.table)
    print(
        f"solc: version={solc.version or 'default'} "
        f"optimizer={'on' if solc.optimizer_enabled else 'off'} runs={solc.optimizer_runs} "
        f"evm={solc.evm_version or 'default'}"
    )
    return EXIT_OK


def _show_profile(args: argparse.Namespace) -> int:
    profile = get_profile(args.name, load_network_profiles(args.table))
    print(json.dumps(asdict(profile), indent=2, sort_keys=True))
    return EXIT_OK


def _deploy(args: argparse.Namespace) -> int:
    profiles = load_network_profiles(args.table)
    options = deployment_options(
        get_profile(args.network, profiles),
        **{option: getattr(args, option) for option in DEFAULT_DEPLOYMENT_OPTIONS},
    )
    return run_deployment(
        args.network,
        project_root=args.project_root,
        profiles=profiles,
        options=options,
        contract_name=args.contract,
        constructor_args=args.constructor_args,
    )


def _status(args: argparse.Namespace) -> int:
    profile = get_profile(args.network, load_network_profiles(args.table))
    result_path = get_result_path(args.project_root)
    try:
        deployed = deployment_status(profile, result_path)
    except (ResultNotFoundError, MalformedResultError, NetworkClientError) as e:
        logger.error("Error checking deployment: %s", e)
        return EXIT_DEPLOYMENT_ERROR

    if deployed:
        logger.info("Contract recorded in %s is deployed on %s", result_path, profile.name)
        return EXIT_OK
    logger.error("No contract found on %s at the address recorded in %s", profile.name, result_path)
    return EXIT_DEPLOYMENT_ERROR


COMMANDS = {
    "deploy": _deploy,
    "profiles": _list_profiles,
    "show-profile": _show_profile,
    "status": _status,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI and return the process exit status."""
    load_dotenv(find_dotenv(usecwd=True))

    args = build_parser().parse_args(argv)
    _configure_logging(args)

    try:
        return COMMANDS[args.command](args)
    except ProfileNotFoundError as e:
        logger.error("%s", e)
        return EXIT_UNKNOWN_PROFILE


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
