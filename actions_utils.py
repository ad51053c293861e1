"""
Helpers for running inside a GitHub Actions job: log groups, annotations and step outputs.
See https://docs.github.com/en/actions/using-workflows/workflow-commands-for-github-actions
"""
import logging
import os
import sys
from contextlib import contextmanager

from repo_config import BASE_COMMITISH, TARGET_COMMITISH

logger = logging.getLogger(__name__)


def setup_logging(loglevel):
    numeric_level = getattr(logging, loglevel.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {loglevel}")

    root = logging.getLogger()
    root.setLevel(numeric_level)
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    formatter = logging.Formatter("%(filename)s:%(lineno)d [%(levelname)s] %(message)s")
    handler.setFormatter(formatter)
    root.addHandler(handler)


def _workflow_command(command, message=""):
    sys.stdout.flush()
    print("::%s::%s" % (command, message))
    sys.stdout.flush()


@contextmanager
def log_group(title):
    """Fold everything logged inside the block under a collapsible group."""
    _workflow_command("group", title)
    try:
        yield
    finally:
        _workflow_command("endgroup")


def notice(message):
    _workflow_command("notice", message)


def set_output(name, value):
    output_file = os.environ.get("GITHUB_OUTPUT")
    if not output_file:
        logger.info("GITHUB_OUTPUT not set, output %s=%s", name, value)
        return
    with open(output_file, "a") as ref:
        ref.write("%s=%s\n" % (name, value))
    logger.debug("Wrote output %s=%s to %s", name, value, output_file)


def add_pr_arguments(parser):
    parser.add_argument(
        "-r",
        "--repository",
        default=None,
        help="Github repository e.g. Azure/azure-rest-api-specs. Defaults to GITHUB_REPOSITORY.",
    )
    parser.add_argument(
        "-p",
        "--pull",
        type=int,
        default=None,
        help="Pull request number. Defaults to the pull request of the Actions event.",
    )
    parser.add_argument(
        "-w", "--workspace", default=None, help="Repository checkout. Defaults to GITHUB_WORKSPACE."
    )
    parser.add_argument("-n", "--dry-run", action="store_true", help="Do not modify Github")
    parser.add_argument("-l", "--log-level", default="INFO", help="Set level of logging")
    return parser


def add_commit_arguments(parser):
    parser.add_argument("-b", "--base", default=BASE_COMMITISH, help="Commit to compare against")
    parser.add_argument("-t", "--target", default=TARGET_COMMITISH, help="Commit with the changes")
    return parser
