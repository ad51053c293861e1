import json
import logging
import os
import re
from calendar import timegm
from datetime import datetime
from os.path import exists, expanduser
from time import sleep, gmtime
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from github import Github, UnknownObjectException

import repo_config
from actions_utils import notice
from arm_static import PASSING_CHECK_CONCLUSIONS

logger = logging.getLogger(__name__)

GH_TOKENS = []
GH_TOKEN_INDEX = 0


class PullRequestContextError(ValueError):
    pass


class PullRequestContext(object):
    """Pull request being processed: repository, number, base branch, head commit and checkout."""

    def __init__(self, repository, number, base_ref=None, head_sha=None, workspace=None):
        if not repository:
            raise PullRequestContextError("Repository name (owner/repo) is required")
        if not number:
            raise PullRequestContextError("May only run in context of a pull request")
        self.repository = repository
        self.number = int(number)
        self.base_ref = base_ref
        self.head_sha = head_sha
        self.workspace = workspace or repo_config.get_workspace()

    def __repr__(self):
        return "PullRequestContext(%s#%s, base=%s, head=%s, workspace=%s)" % (
            self.repository,
            self.number,
            self.base_ref,
            self.head_sha,
            self.workspace,
        )


def read_event_payload(event_path=None):
    if not event_path:
        event_path = os.environ.get("GITHUB_EVENT_PATH")
    if not event_path or not exists(event_path):
        return {}
    with open(event_path) as ref:
        return json.load(ref)


def get_pr_context(repository=None, number=None, workspace=None, event_path=None):
    """
    Build the context from the Actions event payload, with explicit arguments taking precedence.
    Raises PullRequestContextError when no pull request can be identified.
    """
    payload = read_event_payload(event_path)
    pull_request = payload.get("pull_request") or {}
    if not number and not pull_request:
        raise PullRequestContextError("May only run in context of a pull request")
    if not repository:
        repository = (payload.get("repository") or {}).get("full_name") or os.environ.get(
            "GITHUB_REPOSITORY"
        )
    ctx = PullRequestContext(
        repository,
        number or pull_request.get("number"),
        base_ref=(pull_request.get("base") or {}).get("ref"),
        head_sha=(pull_request.get("head") or {}).get("sha"),
        workspace=workspace,
    )
    logger.info("Processing %s", ctx)
    return ctx


def get_gh_token(token_file=None):
    global GH_TOKENS, GH_TOKEN_INDEX
    if not GH_TOKENS:
        GH_TOKEN_INDEX = 0
        env_token = os.environ.get("GITHUB_TOKEN", "").strip()
        if env_token:
            GH_TOKENS = [env_token]
        else:
            if not token_file:
                token_file = expanduser(repo_config.GH_TOKEN)
            try:
                with open(token_file) as ref:
                    GH_TOKENS = [t.strip() for t in ref.readlines() if t.strip()]
            except OSError:
                logger.warning("Unable to read github token from %s", token_file)
            if not GH_TOKENS:
                GH_TOKENS = [""]
    return GH_TOKENS[GH_TOKEN_INDEX]


def get_github(token=None):
    if token is None:
        token = get_gh_token()
    return Github(login_or_token=token or None, per_page=100)


def api_rate_limits(gh, msg=True):
    gh.get_rate_limit()
    remaining, limit = gh.rate_limiting
    reset_time = gh.rate_limiting_resettime
    rate_reset_sec = reset_time - timegm(gmtime()) + 5
    if msg:
        logger.info(
            "API Rate Limit: %s/%s, Reset in %s sec i.e. at %s",
            remaining,
            limit,
            rate_reset_sec,
            datetime.fromtimestamp(reset_time),
        )
    doSleep = 0
    if remaining < 100:
        doSleep = rate_reset_sec
    elif remaining < 200:
        doSleep = 5
    elif remaining < 500:
        doSleep = 1
    if rate_reset_sec < doSleep:
        doSleep = rate_reset_sec
    if doSleep > 0:
        logger.warning(
            "Slowing down for %s sec due to api rate limits %s approching zero", doSleep, remaining
        )
        sleep(doSleep)


def github_api(uri, params=None, method="GET", headers=None, page=1, per_page=100, all_pages=True):
    if not params:
        params = {}
    if not headers:
        headers = {}
    url = "%s%s" % (repo_config.GH_API_URL, uri)
    data = None
    if method == "GET":
        if per_page and "per_page" not in params:
            params["per_page"] = per_page
        if page > 1:
            params["page"] = page
        if params:
            url = url + "?" + urlencode(params)
    else:
        data = json.dumps(params).encode("utf-8")
    headers["Accept"] = "application/vnd.github+json"
    token = get_gh_token()
    if token:
        headers["Authorization"] = "token " + token
    request = Request(url, data=data, headers=headers, method=method)
    logger.debug("%s %s", method, url)
    with urlopen(request) as response:
        link = response.headers.get("Link") or ""
        result = json.loads(response.read() or "null")
    if all_pages and page == 1 and isinstance(result, list):
        last_page = 1
        for x in link.split(","):
            if 'rel="last"' not in x:
                continue
            m = re.match(r"^.*[?&]page=([1-9][0-9]*).*$", x)
            if m:
                last_page = int(m.group(1))
        for next_page in range(2, last_page + 1):
            result += github_api(
                uri, dict(params), method, headers, next_page, per_page, all_pages=False
            )
    return result


def get_issue(repo, ctx):
    return repo.get_issue(ctx.number)


def get_label_names(issue):
    label_names = [l.name for l in issue.get_labels()]
    logger.info("Labels: %s", label_names)
    return label_names


def has_label(issue, name):
    return name in get_label_names(issue)


def add_label(issue, name, dry_run=False):
    notice("Adding label '%s'" % name)
    if dry_run:
        logger.info("DRY RUN: not adding label '%s'", name)
        return
    issue.add_to_labels(name)


def add_label_if_not_exists(issue, name, dry_run=False):
    if has_label(issue, name):
        logger.info("Label '%s' already exists", name)
        return False
    add_label(issue, name, dry_run)
    return True


def remove_label_if_exists(issue, name, dry_run=False):
    if not has_label(issue, name):
        logger.info("Label '%s' does not exist", name)
        return False
    notice("Removing label '%s'" % name)
    if dry_run:
        logger.info("DRY RUN: not removing label '%s'", name)
        return True
    try:
        issue.remove_from_labels(name)
    except UnknownObjectException:
        # Removed by someone else in the meantime
        logger.info("Label '%s' was already removed", name)
        return False
    return True


def get_check_runs(repo, sha):
    check_runs = list(repo.get_commit(sha).get_check_runs())
    logger.info(
        "Check runs for %s: %s", sha, ["%s=%s" % (c.name, c.conclusion) for c in check_runs]
    )
    return check_runs


def get_branch_required_checks(repo, branch):
    try:
        required = repo.get_branch(branch).get_required_status_checks()
    except UnknownObjectException:
        logger.info("Branch %s has no required status checks", branch)
        return []
    return list(required.contexts or [])


def get_ruleset_required_checks(repository, branch):
    checks = []
    for rule in github_api("/repos/%s/rules/branches/%s" % (repository, branch)):
        if rule.get("type") != "required_status_checks":
            continue
        parameters = rule.get("parameters") or {}
        for check in parameters.get("required_status_checks") or []:
            if check["context"] not in checks:
                checks.append(check["context"])
    logger.info("Ruleset required checks for %s:%s: %s", repository, branch, checks)
    return checks


def all_required_checks_passing(repo, ctx):
    if not (ctx.base_ref and ctx.head_sha):
        raise PullRequestContextError("Base branch and head commit are required to verify checks")
    required = get_branch_required_checks(repo, ctx.base_ref)
    for context in get_ruleset_required_checks(ctx.repository, ctx.base_ref):
        if context not in required:
            required.append(context)
    if not required:
        return True
    latest = {}
    for run in get_check_runs(repo, ctx.head_sha):
        if run.name not in latest or run.id > latest[run.name].id:
            latest[run.name] = run
    for context in required:
        run = latest.get(context)
        if not run:
            logger.info("Required check '%s' has not run", context)
            return False
        if run.conclusion not in PASSING_CHECK_CONCLUSIONS:
            logger.info("Required check '%s' is %s/%s", context, run.status, run.conclusion)
            return False
    logger.info("All required checks are passing: %s", required)
    return True


def get_repo_and_context(opts):
    ctx = get_pr_context(opts.repository, opts.pull, opts.workspace)
    gh = get_github()
    api_rate_limits(gh)
    return gh, gh.get_repo(ctx.repository), ctx
