#!/usr/bin/env python3
from argparse import ArgumentParser

from actions_utils import setup_logging, add_pr_arguments
from github_utils import get_repo_and_context, get_issue, add_label_if_not_exists


def main():
    parser = ArgumentParser(description="Add a label to the pull request unless it has it")
    add_pr_arguments(parser)
    parser.add_argument("label", help="Label name")
    opts = parser.parse_args()
    setup_logging(opts.log_level)

    gh, repo, ctx = get_repo_and_context(opts)
    add_label_if_not_exists(get_issue(repo, ctx), opts.label, dry_run=opts.dry_run)


if __name__ == "__main__":
    main()
