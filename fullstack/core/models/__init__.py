"""
Domain models — units, operations, and receipts.

All models are re-exported here for convenient access:

    from fullstack.core.models import Unit, Operation, Receipt
"""

from fullstack.core.models.operation import (
    BUILD,
    CLEAN,
    DEFAULT_OPERATIONS,
    MAVEN_ROOT_REPOSITORY_NAME,
    PATH_SEPARATOR,
    PUBLISH,
    WRAPPER,
    CrossBuildAddress,
    IntraTreeAddress,
    Operation,
    OperationAddress,
    PostAction,
    UnitState,
)
from fullstack.core.models.receipt import Receipt
from fullstack.core.models.unit import (
    REPOSITORY_SUFFIX,
    UNSPECIFIED_VERSION,
    PublicationRepository,
    PublishCapability,
    Unit,
)

__all__ = [
    # operation.py
    "BUILD",
    "CLEAN",
    "CrossBuildAddress",
    "DEFAULT_OPERATIONS",
    "IntraTreeAddress",
    "MAVEN_ROOT_REPOSITORY_NAME",
    "Operation",
    "OperationAddress",
    "PATH_SEPARATOR",
    "PUBLISH",
    "PostAction",
    # unit.py
    "PublicationRepository",
    "PublishCapability",
    "REPOSITORY_SUFFIX",
    # receipt.py
    "Receipt",
    "UNSPECIFIED_VERSION",
    "Unit",
    "UnitState",
    "WRAPPER",
]
