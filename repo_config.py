from os.path import dirname, abspath, join, exists
import os

import yaml

try:
    from yaml import CSafeLoader as Loader
except ImportError:
    from yaml import SafeLoader as Loader

from arm_static import (
    ARM_REVIEW,
    NOT_READY_FOR_ARM_REVIEW,
    ARM_BEST_PRACTICES,
    SUPPRESSION_REVIEW_REQUIRED,
    SUPPRESSION_APPROVED,
)

CONFIG_DIR = dirname(abspath(__file__))
GH_TOKEN = os.getenv("GH_TOKEN_FILE", "~/.github-token")
GH_API_URL = os.getenv("GITHUB_API_URL", "https://api.github.com")
BASE_COMMITISH = "HEAD^"
TARGET_COMMITISH = "HEAD"
AUTO_SIGNOFF_CONFIG = os.getenv(
    "ARM_AUTO_SIGNOFF_CONFIG", join(CONFIG_DIR, "arm-auto-signoff.yaml")
)

DEFAULT_AUTO_SIGNOFF_POLICY = {
    "review_label": ARM_REVIEW,
    "not_ready_label": NOT_READY_FOR_ARM_REVIEW,
    "best_practices_label": ARM_BEST_PRACTICES,
    "suppression_review_label": SUPPRESSION_REVIEW_REQUIRED,
    "suppression_approved_label": SUPPRESSION_APPROVED,
    "require_passing_checks": False,
}


def get_workspace():
    return os.getenv("GITHUB_WORKSPACE") or os.getcwd()


class AutoSignoffPolicy(object):
    """Label names checked before a PR is automatically signed off."""

    def __init__(self, **kwargs):
        unknown = set(kwargs) - set(DEFAULT_AUTO_SIGNOFF_POLICY)
        if unknown:
            raise ValueError("Unknown auto signoff settings: %s" % ", ".join(sorted(unknown)))
        for key, value in DEFAULT_AUTO_SIGNOFF_POLICY.items():
            setattr(self, key, kwargs.get(key, value))
        self.require_passing_checks = bool(self.require_passing_checks)

    def __repr__(self):
        return "AutoSignoffPolicy(%s)" % ", ".join(
            "%s=%r" % (k, getattr(self, k)) for k in sorted(DEFAULT_AUTO_SIGNOFF_POLICY)
        )


def read_auto_signoff_policy(config_file=None):
    if not config_file:
        config_file = AUTO_SIGNOFF_CONFIG
    if not exists(config_file):
        return AutoSignoffPolicy()
    with open(config_file) as ref:
        data = yaml.load(ref, Loader=Loader)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("Invalid auto signoff config %s: expected a mapping" % config_file)
    return AutoSignoffPolicy(**data)
