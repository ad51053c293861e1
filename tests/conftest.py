import os
import shutil
import subprocess
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


class FakeLabel:
    def __init__(self, name):
        self.name = name


class FakeIssue:
    """Stands in for github.Issue.Issue, recording every label mutation."""

    def __init__(self, labels=None):
        self.labels = list(labels or [])
        self.actions = []

    def get_labels(self):
        return [FakeLabel(l) for l in self.labels]

    def add_to_labels(self, *labels):
        self.actions.append(("add", labels))
        for l in labels:
            if l not in self.labels:
                self.labels.append(l)

    def remove_from_labels(self, label):
        self.actions.append(("remove", label))
        self.labels.remove(label)


class FakeRepo:
    def __init__(self, issue):
        self.issue = issue
        self.requested = []

    def get_issue(self, number):
        self.requested.append(number)
        return self.issue


@pytest.fixture
def fake_issue():
    return FakeIssue()


@pytest.fixture(autouse=True)
def no_actions_env(monkeypatch):
    for name in ["GITHUB_OUTPUT", "GITHUB_EVENT_PATH", "GITHUB_REPOSITORY", "GITHUB_TOKEN"]:
        monkeypatch.delenv(name, raising=False)


class GitRepo:
    def __init__(self, path):
        self.path = str(path)
        self.git("init", "-q")

    def git(self, *args):
        cmd = ["git", "-c", "user.name=tester", "-c", "user.email=tester@example.com"]
        cmd += ["-c", "commit.gpgsign=false"] + list(args)
        return subprocess.run(
            cmd, cwd=self.path, check=True, capture_output=True, text=True
        ).stdout

    def write(self, relpath, content):
        full = os.path.join(self.path, relpath)
        os.makedirs(os.path.dirname(full), exist_ok=True)
        with open(full, "w") as ref:
            ref.write(content)

    def remove(self, relpath):
        self.git("rm", "-q", relpath)

    def commit(self, message="update"):
        self.git("add", "-A")
        self.git("commit", "-q", "--allow-empty", "-m", message)


@pytest.fixture
def git_repo(tmp_path):
    if not shutil.which("git"):
        pytest.skip("git is not installed")
    return GitRepo(tmp_path)
