"""Error types raised by the subnet arithmetic and network plan generator.

Every error carries a machine-readable ``code`` and the HTTP ``status_code``
the API layer should answer with. Validation failures are 400, internal
invariant failures are 500.
"""


class CidrPlanError(ValueError):
    """Base class for all subnet calculation and network planning errors."""

    code = "CIDR_PLAN_ERROR"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidAddressError(CidrPlanError):
    """Dotted-decimal string is not exactly 4 octets in [0, 255]."""

    code = "INVALID_ADDRESS"


class InvalidPrefixError(CidrPlanError):
    """Prefix length outside [0, 32]."""

    code = "INVALID_PREFIX"


class InvalidCidrFormatError(CidrPlanError):
    """CIDR string is not of the form address/prefix."""

    code = "INVALID_CIDR_FORMAT"


class CannotSplitError(CidrPlanError):
    code = "CANNOT_SPLIT"


class TreeSizeLimitExceededError(CidrPlanError):
    code = "TREE_SIZE_LIMIT_EXCEEDED"


class PublicAddressRejectedError(CidrPlanError):
    """VPC CIDR is outside the RFC 1918 private ranges."""

    code = "PUBLIC_ADDRESS_REJECTED"


class UnknownDeploymentSizeError(CidrPlanError):
    code = "UNKNOWN_DEPLOYMENT_SIZE"


class UnknownProviderError(CidrPlanError):
    code = "UNKNOWN_PROVIDER"


class VpcTooSmallError(CidrPlanError):
    code = "VPC_TOO_SMALL"


class AddressSpaceExhaustedError(CidrPlanError):
    """Allocation would run past 255.255.255.255."""

    code = "ADDRESS_SPACE_EXHAUSTED"
    status_code = 500


class PlanAssemblyInvariantViolationError(CidrPlanError):
    """Assembled plan failed re-validation. Indicates a bug, not a caller error."""

    code = "PLAN_ASSEMBLY_INVARIANT_VIOLATION"
    status_code = 500


class SubnetNotFoundError(CidrPlanError):
    """CIDR does not name a node of the split tree."""

    code = "SUBNET_NOT_FOUND"


class InvalidPlanRequestError(CidrPlanError):
    """Plan request is missing a field or has a field of the wrong type."""

    code = "INVALID_PLAN_REQUEST"
