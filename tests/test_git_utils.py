import json
from unittest.mock import patch

import pytest

import git_utils
from git_utils import (
    GitCommandError,
    GitObjectNotFound,
    exec_root,
    path_exists_at,
    list_files_at,
    file_content_at,
    get_changed_files,
    get_changed_swagger_files,
)

FOO = "specification/foo/resource-manager/Microsoft.Foo"
BAR = "specification/bar/resource-manager/Microsoft.Bar"


@pytest.fixture
def two_commits(git_repo):
    git_repo.write(FOO + "/stable/2020-01-01/foo.json", json.dumps({"info": {"title": "foo"}}))
    git_repo.write(FOO + "/stable/2020-01-01/examples/Get.json", "{}")
    git_repo.write("README.md", "specs\n")
    git_repo.commit("base")
    git_repo.write(FOO + "/stable/2021-01-01/foo.json", json.dumps({"info": {"title": "foo"}}))
    git_repo.write(BAR + "/preview/2021-01-01-preview/bar.json", "{}")
    git_repo.write(FOO + "/stable/2020-01-01/examples/Get.json", '{"changed": true}')
    git_repo.write("README.md", "specs changed\n")
    git_repo.remove(FOO + "/stable/2020-01-01/foo.json")
    git_repo.commit("change")
    return git_repo


def test_path_exists_at(two_commits):
    ws = two_commits.path
    assert path_exists_at("HEAD^", FOO, ws)
    assert path_exists_at("HEAD^", FOO + "/stable/2020-01-01/foo.json", ws)
    assert not path_exists_at("HEAD^", BAR, ws)
    assert path_exists_at("HEAD", BAR, ws)


def test_list_files_at(two_commits):
    ws = two_commits.path
    assert list_files_at("HEAD^", FOO, ws) == [
        FOO + "/stable/2020-01-01/examples/Get.json",
        FOO + "/stable/2020-01-01/foo.json",
    ]
    assert list_files_at("HEAD^", BAR, ws) == []


def test_file_content_at(two_commits):
    ws = two_commits.path
    assert json.loads(file_content_at("HEAD^", FOO + "/stable/2020-01-01/foo.json", ws)) == {
        "info": {"title": "foo"}
    }
    with pytest.raises(GitObjectNotFound):
        file_content_at("HEAD^", BAR + "/preview/2021-01-01-preview/bar.json", ws)


def test_get_changed_files(two_commits):
    ws = two_commits.path
    assert sorted(get_changed_files("HEAD^", "HEAD", "d", ws)) == sorted(
        [
            "README.md",
            BAR + "/preview/2021-01-01-preview/bar.json",
            FOO + "/stable/2020-01-01/examples/Get.json",
            FOO + "/stable/2021-01-01/foo.json",
        ]
    )
    assert FOO + "/stable/2020-01-01/foo.json" in get_changed_files("HEAD^", "HEAD", "", ws)


def test_get_changed_swagger_files(two_commits):
    ws = two_commits.path
    assert sorted(get_changed_swagger_files("HEAD^", "HEAD", "d", ws)) == [
        BAR + "/preview/2021-01-01-preview/bar.json",
        FOO + "/stable/2021-01-01/foo.json",
    ]
    assert sorted(get_changed_swagger_files("HEAD^", "HEAD", "", ws)) == [
        BAR + "/preview/2021-01-01-preview/bar.json",
        FOO + "/stable/2020-01-01/foo.json",
        FOO + "/stable/2021-01-01/foo.json",
    ]


def test_unknown_ref_raises(two_commits):
    with pytest.raises(GitCommandError):
        path_exists_at("no-such-branch", FOO, two_commits.path)


def test_workspace_defaults_to_env(monkeypatch, tmp_path):
    monkeypatch.setenv("GITHUB_WORKSPACE", str(tmp_path))
    with patch.object(git_utils, "run_cmd", return_value=(0, "out")) as run_cmd:
        assert exec_root("git status") == "out"
    run_cmd.assert_called_once_with("cd %s && git status" % tmp_path)


def test_exec_root_failure():
    with patch.object(git_utils, "run_cmd", return_value=(128, "fatal: bad")):
        with pytest.raises(GitCommandError) as e:
            exec_root("git ls-tree HEAD^ x", "/tmp")
    assert e.value.status == 128
    assert e.value.output == "fatal: bad"


def test_git_stderr_is_not_parsed(two_commits, monkeypatch):
    # GIT_TRACE makes every git command print trace lines on stderr
    monkeypatch.setenv("GIT_TRACE", "1")
    ws = two_commits.path
    assert not path_exists_at("HEAD^", BAR, ws)
    assert list_files_at("HEAD^", BAR, ws) == []
    assert json.loads(file_content_at("HEAD^", FOO + "/stable/2020-01-01/foo.json", ws)) == {
        "info": {"title": "foo"}
    }
    assert sorted(get_changed_swagger_files("HEAD^", "HEAD", "d", ws)) == [
        BAR + "/preview/2021-01-01-preview/bar.json",
        FOO + "/stable/2021-01-01/foo.json",
    ]
    with pytest.raises(GitObjectNotFound):
        file_content_at("HEAD^", BAR + "/preview/2021-01-01-preview/bar.json", ws)


def test_path_exists_at_ignores_warnings():
    with patch.object(git_utils, "run_cmd", return_value=(0, "")) as run_cmd:
        assert not path_exists_at("HEAD", "specification/foo", "/tmp")
    run_cmd.assert_called_once_with("cd /tmp && git ls-tree HEAD specification/foo 2>/dev/null")


def test_file_content_at_missing_path():
    with patch.object(git_utils, "run_cmd", side_effect=[(128, ""), (0, "")]) as run_cmd:
        with pytest.raises(GitObjectNotFound):
            file_content_at("HEAD^", "specification/foo/x.json", "/tmp")
    assert run_cmd.call_count == 2


def test_file_content_at_unknown_ref(two_commits):
    with pytest.raises(GitCommandError):
        file_content_at("no-such-branch", FOO + "/stable/2021-01-01/foo.json", two_commits.path)
