#!/usr/bin/env python3
"""
Detects whether TypeSpec is being introduced for the first time for a resource provider service.
- typespec-new: the PR has at least one OpenAPI spec generated from TypeSpec and the target branch
  has none for the same services
- typespec-incremental: the target branch already has TypeSpec generated OpenAPI specs for a service
- typespec-noop: no resource-manager OpenAPI specs in the PR, or none generated from TypeSpec
The applied label is also written to the step output "typespec-label".
"""
from argparse import ArgumentParser

from actions_utils import setup_logging, add_pr_arguments, add_commit_arguments
from github_utils import get_repo_and_context, api_rate_limits
from process_arm_pr import process_typespec


def main():
    parser = ArgumentParser(description=__doc__)
    add_pr_arguments(parser)
    add_commit_arguments(parser)
    opts = parser.parse_args()
    setup_logging(opts.log_level)

    gh, repo, ctx = get_repo_and_context(opts)
    state = process_typespec(repo, ctx, opts.base, opts.target, dry_run=opts.dry_run)
    print("TypeSpec:", state)
    api_rate_limits(gh)


if __name__ == "__main__":
    main()
