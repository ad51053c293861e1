"""
Label decisions for pull requests touching resource-manager swagger files.

- rp-service-new / rp-service-existing: does the PR add a new resource provider service?
  The service folder is three levels above a swagger file, e.g. for
    specification/contosowidgetmanager/resource-manager/Microsoft.Contoso/preview/2021-10-01-preview/contoso.json
  it is specification/contosowidgetmanager/resource-manager/Microsoft.Contoso. A PR is for a new
  service when the target branch has no such folder. This covers a new RP namespace as well as a
  new service group under an existing namespace (.../Microsoft.Contoso/contosoGroup1/preview/...).
- typespec-new / typespec-incremental / typespec-noop: does this PR introduce TypeSpec for a service?
- ARMAutoSignedOff: can the ARM review be skipped for this PR?
"""
import logging

from actions_utils import log_group, set_output
from arm_static import (
    ARM_AUTO_SIGNED_OFF,
    RP_SERVICE_NEW,
    RP_SERVICE_EXISTING,
    TYPESPEC_LABELS,
    TYPESPEC_OUTPUT_NAME,
    TYPESPEC_STATE_NEW,
    TYPESPEC_STATE_INCREMENTAL,
    TYPESPEC_STATE_NOOP,
)
from git_utils import (
    get_changed_swagger_files,
    path_exists_at,
    list_files_at,
    file_content_at,
)
from github_utils import (
    get_issue,
    get_label_names,
    add_label_if_not_exists,
    remove_label_if_exists,
    all_required_checks_passing,
)
from repo_config import BASE_COMMITISH, TARGET_COMMITISH
from spec_paths import service_dir_of, resource_manager_files, unique_service_dirs
from swagger import is_generated_from_typespec

logger = logging.getLogger(__name__)


def get_changed_rm_files(
    base=BASE_COMMITISH, target=TARGET_COMMITISH, diff_filter="d", workspace=None
):
    with log_group("get_changed_rm_files()"):
        changed_files = get_changed_swagger_files(base, target, diff_filter, workspace)
        changed_rm_files = resource_manager_files(changed_files)
        logger.info("Changed files containing path '/resource-manager/': %s", changed_rm_files)
        return changed_rm_files


def spec_folder_exists_at(ref, file, workspace=None):
    with log_group('spec_folder_exists_at("%s")' % file):
        spec_dir = service_dir_of(file)
        logger.info("specDir: %s", spec_dir)
        result = path_exists_at(ref, spec_dir, workspace)
        logger.info("returning: %s", result)
        return result


def is_existing_rp_service(changed_rm_files, ref=BASE_COMMITISH, workspace=None):
    """
    :return: True if every changed file belongs to a service which already exists in ref.
             An empty change set is not an existing service.
    """
    if not changed_rm_files:
        logger.info("No changes to swagger files containing path '/resource-manager/'")
        return False
    for file in changed_rm_files:
        if not spec_folder_exists_at(ref, file, workspace):
            logger.info("Appears to add at least one new Resource Provider service: %s", file)
            return False
    logger.info(
        "Appears to change an existing Resource Provider service, "
        "but adds no new Resource Provider services"
    )
    return True


def is_file_generated_from_typespec(file, ref, workspace=None):
    result = is_generated_from_typespec(file_content_at(ref, file, workspace))
    logger.debug("is_file_generated_from_typespec(%s, %s): %s", file, ref, result)
    return result


def any_generated_from_typespec(changed_rm_files, target=TARGET_COMMITISH, workspace=None):
    """Changed files are read at target, the commit the diff was taken against."""
    with log_group("any_generated_from_typespec()"):
        for file in changed_rm_files:
            if is_file_generated_from_typespec(file, target, workspace):
                logger.info("File %s is generated from TypeSpec", file)
                return True
            logger.info("File %s is not generated from TypeSpec", file)
        logger.info("Changes do not include any OpenAPI specs generated from TypeSpec")
        return False


def typespec_files_exist_at(ref, spec_dir, workspace=None):
    with log_group('typespec_files_exist_at("%s")' % spec_dir):
        json_files = [f for f in list_files_at(ref, spec_dir, workspace) if f.endswith(".json")]
        if not json_files:
            logger.info("No JSON files found in %s under %s", ref, spec_dir)
            return False
        for file in json_files:
            if is_file_generated_from_typespec(file, ref, workspace):
                logger.info("File %s in %s is generated from TypeSpec", file, ref)
                return True
        logger.info("No TypeSpec generated files found in %s under %s", ref, spec_dir)
        return False


def is_first_typespec_pr_for_service(changed_rm_files, ref=BASE_COMMITISH, workspace=None):
    """
    :return: True if none of the service folders touched by the change has a
             TypeSpec generated OpenAPI spec in ref. Each folder is checked once.
    """
    with log_group("is_first_typespec_pr_for_service()"):
        for spec_dir in unique_service_dirs(changed_rm_files):
            if typespec_files_exist_at(ref, spec_dir, workspace):
                logger.info(
                    "Service folder %s already has a TypeSpec generated OpenAPI spec in %s",
                    spec_dir,
                    ref,
                )
                return False
        logger.info("TypeSpec is introduced for the first time for the services in this change")
        return True


def get_typespec_state(
    changed_rm_files, ref=BASE_COMMITISH, workspace=None, target=TARGET_COMMITISH
):
    if not changed_rm_files:
        logger.info("No changes to files containing path '/resource-manager/'")
        return TYPESPEC_STATE_NOOP
    if not any_generated_from_typespec(changed_rm_files, target, workspace):
        return TYPESPEC_STATE_NOOP
    if is_first_typespec_pr_for_service(changed_rm_files, ref, workspace):
        return TYPESPEC_STATE_NEW
    return TYPESPEC_STATE_INCREMENTAL


def apply_exclusive_label(issue, label, other_labels, dry_run=False):
    add_label_if_not_exists(issue, label, dry_run)
    for other in other_labels:
        if other != label:
            remove_label_if_exists(issue, other, dry_run)


def process_rp_service(repo, ctx, base=BASE_COMMITISH, target=TARGET_COMMITISH, dry_run=False):
    with log_group("is_existing_rp_service()"):
        changed_rm_files = get_changed_rm_files(base, target, "", ctx.workspace)
        existing = is_existing_rp_service(changed_rm_files, base, ctx.workspace)
    label = RP_SERVICE_EXISTING if existing else RP_SERVICE_NEW
    issue = get_issue(repo, ctx)
    apply_exclusive_label(issue, label, [RP_SERVICE_NEW, RP_SERVICE_EXISTING], dry_run)
    return label


def process_typespec(repo, ctx, base=BASE_COMMITISH, target=TARGET_COMMITISH, dry_run=False):
    changed_rm_files = get_changed_rm_files(base, target, "d", ctx.workspace)
    state = get_typespec_state(changed_rm_files, base, ctx.workspace, target)
    label = TYPESPEC_LABELS[state]
    logger.info("TypeSpec state: %s", state)
    apply_exclusive_label(get_issue(repo, ctx), label, list(TYPESPEC_LABELS.values()), dry_run)
    set_output(TYPESPEC_OUTPUT_NAME, label)
    return state


def has_unresolved_suppressions(label_names, policy):
    return (
        policy.suppression_review_label in label_names
        and policy.suppression_approved_label not in label_names
    )


def is_auto_signoff_eligible(repo, ctx, policy, base=BASE_COMMITISH, target=TARGET_COMMITISH):
    """
    All of the following must hold, checked in order:
    - PR has the ARM review label and not the "not ready" label
    - authors attested adherence to the design best practices which are not automated
    - no lintdiff suppressions are pending review
    - PR only has incremental changes to existing resource providers
      (the first PR for a new RP still goes thru the manual review)
    - PR is an incremental TypeSpec change, not a conversion to TypeSpec
    - optionally, all required checks are passing
    """
    label_names = get_label_names(get_issue(repo, ctx))
    if policy.review_label not in label_names:
        logger.info("PR does not have label '%s'", policy.review_label)
        return False
    if policy.not_ready_label in label_names:
        logger.info("PR has label '%s'", policy.not_ready_label)
        return False
    if policy.best_practices_label not in label_names:
        logger.info("PR does not have label '%s'", policy.best_practices_label)
        return False
    if has_unresolved_suppressions(label_names, policy):
        logger.info(
            "PR has label '%s' without '%s'",
            policy.suppression_review_label,
            policy.suppression_approved_label,
        )
        return False
    with log_group("incremental_changes_to_existing_rp()"):
        rm_files = get_changed_rm_files(base, target, "", ctx.workspace)
        if not is_existing_rp_service(rm_files, base, ctx.workspace):
            return False
    with log_group("incremental_typespec()"):
        rm_files = get_changed_rm_files(base, target, "d", ctx.workspace)
        state = get_typespec_state(rm_files, base, ctx.workspace, target)
        if state != TYPESPEC_STATE_INCREMENTAL:
            logger.info("TypeSpec state is %s, not %s", state, TYPESPEC_STATE_INCREMENTAL)
            return False
    if policy.require_passing_checks:
        with log_group("all_required_checks_passing()"):
            if not all_required_checks_passing(repo, ctx):
                return False
    return True


def process_auto_signoff(
    repo, ctx, policy, base=BASE_COMMITISH, target=TARGET_COMMITISH, dry_run=False
):
    logger.info("Auto signoff policy: %s", policy)
    eligible = is_auto_signoff_eligible(repo, ctx, policy, base, target)
    issue = get_issue(repo, ctx)
    if eligible:
        add_label_if_not_exists(issue, ARM_AUTO_SIGNED_OFF, dry_run)
    else:
        remove_label_if_exists(issue, ARM_AUTO_SIGNED_OFF, dry_run)
    return eligible
