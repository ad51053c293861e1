import logging
from shlex import quote
from subprocess import getstatusoutput as run_cmd

from repo_config import get_workspace, BASE_COMMITISH, TARGET_COMMITISH
from spec_paths import is_swagger_file

logger = logging.getLogger(__name__)

# run_cmd merges stderr into the output, so commands whose output is parsed drop it
QUIET = " 2>/dev/null"


class GitCommandError(RuntimeError):
    def __init__(self, cmd, status, output):
        super().__init__("Command failed (%s): %s\n%s" % (status, cmd, output))
        self.cmd = cmd
        self.status = status
        self.output = output


class GitObjectNotFound(LookupError):
    pass


def exec_root(cmd, workspace=None):
    """Run cmd in the workspace root and return its output, raising GitCommandError on failure."""
    if not workspace:
        workspace = get_workspace()
    full_cmd = "cd %s && %s" % (quote(workspace), cmd)
    logger.debug("Executing: %s", full_cmd)
    err, out = run_cmd(full_cmd)
    if err:
        raise GitCommandError(cmd, err, out)
    return out


def path_exists_at(ref, path, workspace=None):
    # "git ls-tree" prints nothing when the path is absent from ref
    out = exec_root("git ls-tree %s %s%s" % (quote(ref), quote(path), QUIET), workspace)
    result = bool(out.strip())
    logger.debug("path_exists_at(%s, %s): %s", ref, path, result)
    return result


def list_files_at(ref, directory, workspace=None):
    cmd = "git -c core.quotepath=off ls-tree -r --name-only %s %s%s" % (
        quote(ref),
        quote(directory),
        QUIET,
    )
    out = exec_root(cmd, workspace)
    return [f for f in out.split("\n") if f.strip()]


def file_content_at(ref, path, workspace=None):
    cmd = "git show %s%s" % (quote("%s:%s" % (ref, path)), QUIET)
    try:
        return exec_root(cmd, workspace)
    except GitCommandError:
        # an unknown ref raises from path_exists_at as well
        if not path_exists_at(ref, path, workspace):
            raise GitObjectNotFound("%s does not exist in %s" % (path, ref))
        raise


def get_changed_files(
    base=BASE_COMMITISH, target=TARGET_COMMITISH, diff_filter="d", workspace=None
):
    cmd = "git -c core.quotepath=off diff --name-only"
    if diff_filter:
        cmd += " --diff-filter=%s" % quote(diff_filter)
    cmd += " %s %s%s" % (quote(base), quote(target), QUIET)
    out = exec_root(cmd, workspace)
    return [f.strip() for f in out.split("\n") if f.strip()]


def get_changed_swagger_files(
    base=BASE_COMMITISH, target=TARGET_COMMITISH, diff_filter="d", workspace=None
):
    changed_files = get_changed_files(base, target, diff_filter, workspace)
    swagger_files = [f for f in changed_files if is_swagger_file(f)]
    logger.info("Changed swagger files (%s total): %s", len(swagger_files), swagger_files)
    return swagger_files
