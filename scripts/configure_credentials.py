#!/usr/bin/env python3
"""
CI Credentials CLI

A command-line utility for CI jobs that hold temporary AWS credentials.
It validates the credentials against the expected identity and saves them
as a named profile in the AWS credentials file.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from botocore.exceptions import BotoCoreError, ClientError

# Add the parent directory to sys.path to import from ci_credentials
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))
from ci_credentials import Credentials, CredentialsHelperError
from ci_credentials.aws_profiles import list_profile_names, save_credentials_to_config
from ci_credentials.config import load_retry_config
from ci_credentials.identity import CredentialsValidator, StsIdentityLookup
from ci_credentials.logging_config import configure_logging
from ci_credentials.utils.github_actions import (
    export_account_id,
    export_credentials,
    github_context,
)

logger = logging.getLogger("ci_credentials.cli")

FAILURES = (CredentialsHelperError, BotoCoreError, ClientError, OSError, asyncio.TimeoutError)


def _build_validator(args, credentials=None):
    lookup = StsIdentityLookup(
        credentials=credentials,
        profile_name=getattr(args, "profile", None),
        region=getattr(args, "region", None),
        proxy_server=getattr(args, "proxy_server", None),
    )
    return CredentialsValidator(lookup, retry_config=load_retry_config())


def _fail(message):
    print(f"❌ {message}")
    sys.exit(1)


def handle_validate(args):
    """Handle the validate command."""
    credentials = Credentials.from_environ()
    validator = _build_validator(args, credentials if credentials.is_complete() else None)

    try:
        identity = asyncio.run(validator.validate_credentials(
            expected_access_key_id=args.expected_access_key_id,
            role_chaining=args.role_chaining,
            timeout=args.timeout,
        ))
    except FAILURES as e:
        _fail(f"Credential validation failed: {e}")

    if args.output_account_id:
        export_account_id(identity)
    print(f"✅ Credentials are valid: {identity}")


def handle_save(args):
    """Handle the save command."""
    credentials = Credentials.from_environ()

    async def run():
        if args.validate:
            validator = _build_validator(args, credentials if credentials.is_complete() else None)
            await validator.validate_credentials(
                expected_access_key_id=credentials.access_key_id,
                role_chaining=args.role_chaining,
                timeout=args.timeout,
            )
        await save_credentials_to_config(
            profile_name=args.profile_name,
            credentials=credentials,
            credentials_path=args.credentials_file,
        )

    try:
        asyncio.run(run())
    except FAILURES as e:
        _fail(f"Could not save credentials: {e}")

    if args.export_env:
        export_credentials(credentials)
    print(f"✅ Saved credentials to profile: {args.profile_name}")


def handle_list(args):
    """Handle the list command."""
    try:
        names = asyncio.run(list_profile_names(credentials_path=args.credentials_file))
    except OSError as e:
        _fail(f"Could not read credentials file: {e}")

    if not names:
        print("No profiles found.")
        return
    print("Profiles:")
    for name in names:
        print(f"  {name}")


def _add_lookup_arguments(parser):
    parser.add_argument("--role-chaining", action="store_true",
                        help="Require a role-chained session")
    parser.add_argument("--profile", help="Profile to load credentials from for the identity check")
    parser.add_argument("--region", help="Region of the STS endpoint")
    parser.add_argument("--proxy-server", help="HTTP(S) proxy for STS calls")
    parser.add_argument("--timeout", type=float, help="Overall timeout in seconds for the identity check")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="CI Credentials - validate and store temporary AWS credentials"
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Validate the current AWS credentials")
    validate_parser.add_argument("--expected-access-key-id",
                                 help="Access key id the credentials must use")
    validate_parser.add_argument("--output-account-id", action="store_true",
                                 help="Publish the account id as a step output")
    _add_lookup_arguments(validate_parser)
    validate_parser.set_defaults(func=handle_validate)

    # Save command
    save_parser = subparsers.add_parser("save", help="Save AWS_* credentials as a named profile")
    save_parser.add_argument("--profile-name", required=True, help="Profile to create or replace")
    save_parser.add_argument("--validate", action="store_true",
                             help="Validate the credentials before saving them")
    save_parser.add_argument("--export-env", action="store_true",
                             help="Also export the credentials to later workflow steps")
    save_parser.add_argument("--credentials-file", help="Credentials file to write")
    _add_lookup_arguments(save_parser)
    save_parser.set_defaults(func=handle_save)

    # List command
    list_parser = subparsers.add_parser("list", help="List profiles in the credentials file")
    list_parser.add_argument("--credentials-file", help="Credentials file to read")
    list_parser.set_defaults(func=handle_list)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(0)

    configure_logging(args.log_level)
    context = github_context()
    if context:
        logger.info("Running for %s", ", ".join(f"{k}={v}" for k, v in context.items()))

    args.func(args)

if __name__ == "__main__":
    main()
