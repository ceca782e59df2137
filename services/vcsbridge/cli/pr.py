"""
Operator commands against a single pull request.

Run via: python -m vcsbridge.cli.pr <command> --repo NAME --pull N

Reads configuration the same way the service does (YAML file overridden by
VCSBRIDGE_* environment variables). VCS integration must be enabled:
  VCSBRIDGE_VCS__ENABLED=true
  VCSBRIDGE_VCS__CODECOMMIT__REGION=eu-west-2
  VCSBRIDGE_VCS__CODECOMMIT__USER_ARN=arn:aws:iam::123456789012:user/bot
"""

import argparse
import asyncio
import sys

from vcsbridge.config import settings
from vcsbridge.logging_config import configure_logging, get_logger
from vcsbridge.models import CommitStatus, PullRequest, Repo
from vcsbridge.vcs import close_vcs_client, get_vcs_client_or_none, init_vcs_client
from vcsbridge.vcs.protocol import VCSClient, VCSError

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vcsbridge-pr", description="Operate on one CodeCommit pull request"
    )
    parser.add_argument("--repo", required=True, help="Repository name")
    parser.add_argument("--pull", type=int, required=True, help="Pull request number")
    parser.add_argument("--base", default="", help="Base (destination) branch reference")
    parser.add_argument("--head", default="", help="Head (source) branch reference")

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("link", help="Print the pull request link")
    commands.add_parser("files", help="List modified files")
    commands.add_parser("approved", help="Evaluate approval rules")
    commands.add_parser("mergeable", help="Check for merge conflicts")
    comment = commands.add_parser("comment", help="Post a comment")
    comment.add_argument("--body", required=True, help="Comment text; '-' reads stdin")
    hide = commands.add_parser("hide", help="Hide earlier comments posted for a command")
    hide.add_argument("--command-name", default="plan")
    status = commands.add_parser("status", help="Update approval state")
    status.add_argument("--state", required=True, choices=[s.value for s in CommitStatus])
    status.add_argument("--description", default="")
    status.add_argument("--url", default="")
    commands.add_parser("merge", help="Merge the pull request")
    return parser


async def run_command(client: VCSClient, args: argparse.Namespace) -> str:
    """Execute one parsed command and return the text to print."""
    repo = Repo(name=args.repo)
    pull = PullRequest(
        num=args.pull,
        base_repo=repo,
        base_branch=args.base,
        head_branch=args.head,
    )

    match args.command:
        case "link":
            return client.markdown_pull_link(pull)
        case "files":
            return "\n".join(await client.get_modified_files(repo, pull))
        case "approved":
            return str(await client.pull_is_approved(repo, pull)).lower()
        case "mergeable":
            return str(await client.pull_is_mergeable(repo, pull)).lower()
        case "comment":
            body = sys.stdin.read() if args.body == "-" else args.body
            await client.create_comment(repo, pull.num, body)
            return "comment posted"
        case "hide":
            await client.hide_prev_command_comments(repo, pull.num, args.command_name)
            return f"{args.command_name} comments hidden"
        case "status":
            await client.update_status(
                repo, pull, CommitStatus(args.state), settings.app_name, args.description, args.url
            )
            return f"status set to {args.state}"
        case "merge":
            await client.merge_pull(pull)
            return "merged"
    raise ValueError(f"Unknown command: {args.command}")


async def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(json_logs=settings.json_logs, log_level=settings.log_level)

    await init_vcs_client()
    client = get_vcs_client_or_none()
    if client is None:
        logger.error("VCS integration is disabled; set VCSBRIDGE_VCS__ENABLED=true")
        return 2

    try:
        print(await run_command(client, args))
    except VCSError as e:
        logger.error("Command failed", command=args.command, error=str(e))
        return 1
    finally:
        await close_vcs_client()
    return 0


def cli() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
