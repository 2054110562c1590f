"""Role policy: which authenticated users may perform which operation."""

import enum

from pengaduan.core.errors import ForbiddenError
from pengaduan.models.complaint import Complaint
from pengaduan.models.user import Role
from pengaduan.schemas.auth import CurrentUser


class Operation(enum.Enum):
    CREATE_COMPLAINT = "create_complaint"
    LIST_OWN_COMPLAINTS = "list_own_complaints"
    READ_PROFILE = "read_profile"
    LIST_ALL_COMPLAINTS = "list_all_complaints"
    UPDATE_COMPLAINT_STATUS = "update_complaint_status"
    READ_COMPLAINT = "read_complaint"
    EDIT_COMPLAINT = "edit_complaint"


ANY_AUTHENTICATED = frozenset(
    {Operation.CREATE_COMPLAINT, Operation.LIST_OWN_COMPLAINTS, Operation.READ_PROFILE}
)
ADMIN_ONLY = frozenset({Operation.LIST_ALL_COMPLAINTS, Operation.UPDATE_COMPLAINT_STATUS})
OWNER_OR_ADMIN = frozenset({Operation.READ_COMPLAINT, Operation.EDIT_COMPLAINT})

DENIED_MESSAGES = {
    Operation.LIST_ALL_COMPLAINTS: "Access denied. Only administrators can list all complaints.",
    Operation.UPDATE_COMPLAINT_STATUS: "Access denied. Only administrators can update complaint status.",
}
DEFAULT_DENIED_MESSAGE = "Access denied. You do not have permission."


def can_access(
    user: CurrentUser,
    operation: Operation,
    resource: Complaint | None = None,
) -> bool:
    """Pure access decision; consulted by handlers after the gate has resolved the user."""
    if user.role is Role.ADMIN:
        return True
    if user.role is Role.CITIZEN:
        if operation in ANY_AUTHENTICATED:
            return True
        if operation in ADMIN_ONLY:
            return False
        if operation in OWNER_OR_ADMIN:
            return resource is not None and resource.user_id == user.id
        raise ValueError(f"Unhandled operation: {operation}")
    raise ValueError(f"Unhandled role: {user.role}")


def ensure_access(
    user: CurrentUser,
    operation: Operation,
    resource: Complaint | None = None,
) -> None:
    """Raise ForbiddenError unless can_access allows the operation."""
    if not can_access(user, operation, resource):
        raise ForbiddenError(DENIED_MESSAGES.get(operation, DEFAULT_DENIED_MESSAGE))
