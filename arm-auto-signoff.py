#!/usr/bin/env python3
"""
Applies the label "ARMAutoSignedOff" if the PR is eligible for automatic ARM signoff, else removes it.
"""
from argparse import ArgumentParser

from actions_utils import setup_logging, add_pr_arguments, add_commit_arguments
from github_utils import get_repo_and_context, api_rate_limits
from process_arm_pr import process_auto_signoff
from repo_config import read_auto_signoff_policy


def main():
    parser = ArgumentParser(description=__doc__)
    add_pr_arguments(parser)
    add_commit_arguments(parser)
    parser.add_argument(
        "-c", "--config", default=None, help="YAML file with the auto signoff policy"
    )
    parser.add_argument(
        "--require-checks",
        action="store_true",
        default=False,
        help="Also require all required status checks of the base branch to pass",
    )
    opts = parser.parse_args()
    setup_logging(opts.log_level)

    policy = read_auto_signoff_policy(opts.config)
    if opts.require_checks:
        policy.require_passing_checks = True
    gh, repo, ctx = get_repo_and_context(opts)
    eligible = process_auto_signoff(repo, ctx, policy, opts.base, opts.target, dry_run=opts.dry_run)
    print("Auto signoff:", eligible)
    api_rate_limits(gh)


if __name__ == "__main__":
    main()
