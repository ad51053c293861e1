#!/usr/bin/env python3
from argparse import ArgumentParser

from actions_utils import setup_logging, add_commit_arguments
from git_utils import get_changed_swagger_files
from spec_paths import resource_manager_files, service_dir_of


def main():
    parser = ArgumentParser(description="List swagger files changed between two commits")
    add_commit_arguments(parser)
    parser.add_argument(
        "-f", "--diff-filter", default="d", help="git diff --diff-filter value, empty for all"
    )
    parser.add_argument("-w", "--workspace", default=None, help="Repository checkout")
    parser.add_argument(
        "-m", "--resource-manager", action="store_true", help="Only resource-manager files"
    )
    parser.add_argument("-l", "--log-level", default="WARNING", help="Set level of logging")
    opts = parser.parse_args()
    setup_logging(opts.log_level)

    files = get_changed_swagger_files(opts.base, opts.target, opts.diff_filter, opts.workspace)
    if opts.resource_manager:
        files = resource_manager_files(files)
    for f in files:
        print(f, "->", service_dir_of(f))


if __name__ == "__main__":
    main()
