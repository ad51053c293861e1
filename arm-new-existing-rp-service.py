#!/usr/bin/env python3
"""
Adds the label "rp-service-new" if the PR adds a new resource provider service,
else "rp-service-existing". The first PR for a new resource provider service
still goes thru the usual manual review process.
"""
from argparse import ArgumentParser

from actions_utils import setup_logging, add_pr_arguments, add_commit_arguments
from github_utils import get_repo_and_context, api_rate_limits
from process_arm_pr import process_rp_service


def main():
    parser = ArgumentParser(description=__doc__)
    add_pr_arguments(parser)
    add_commit_arguments(parser)
    opts = parser.parse_args()
    setup_logging(opts.log_level)

    gh, repo, ctx = get_repo_and_context(opts)
    label = process_rp_service(repo, ctx, opts.base, opts.target, dry_run=opts.dry_run)
    print("Label:", label)
    api_rate_limits(gh)


if __name__ == "__main__":
    main()
