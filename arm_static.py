SPEC_ROOT = "specification/"
RESOURCE_MANAGER_SEGMENT = "/resource-manager/"
TYPESPEC_GENERATED_FIELD = "x-typespec-generated"

ARM_AUTO_SIGNED_OFF = "ARMAutoSignedOff"
ARM_REVIEW = "ARMReview"
NOT_READY_FOR_ARM_REVIEW = "NotReadyForARMReview"
ARM_BEST_PRACTICES = "ARMBestPractices"
SUPPRESSION_REVIEW_REQUIRED = "SuppressionReviewRequired"
SUPPRESSION_APPROVED = "Suppression-Approved"

RP_SERVICE_NEW = "rp-service-new"
RP_SERVICE_EXISTING = "rp-service-existing"

TYPESPEC_NEW = "typespec-new"
TYPESPEC_INCREMENTAL = "typespec-incremental"
TYPESPEC_NOOP = "typespec-noop"

# TYPESPEC_LABELS[state] = label applied for that state
TYPESPEC_STATE_NEW = "new"
TYPESPEC_STATE_INCREMENTAL = "incremental"
TYPESPEC_STATE_NOOP = "no-op"
TYPESPEC_LABELS = {
    TYPESPEC_STATE_NEW: TYPESPEC_NEW,
    TYPESPEC_STATE_INCREMENTAL: TYPESPEC_INCREMENTAL,
    TYPESPEC_STATE_NOOP: TYPESPEC_NOOP,
}
TYPESPEC_OUTPUT_NAME = "typespec-label"

# Path segments which never hold an API description, even under specification/
NON_SWAGGER_SEGMENTS = [
    "/examples/",
    "/quickstart-templates/",
    "/scenarios/",
    "/restler/",
    "/common-types/",
]
NON_SWAGGER_FILENAMES = ["package.json", "package-lock.json", "cspell.json"]

# Conclusions of a check run which do not block auto signoff
PASSING_CHECK_CONCLUSIONS = ["success", "neutral", "skipped"]
