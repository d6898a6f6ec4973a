"""Permission names a handler gate may require."""

from enum import StrEnum


class PermissionName(StrEnum):
    """Structured enum of all permission names known to the platform.

    Values match the `permissions.name` column.
    """

    # Articles
    CREATE_ARTICLE = "CREATE_ARTICLE"
    EDIT_OWN_ARTICLE = "EDIT_OWN_ARTICLE"
    DELETE_OWN_ARTICLE = "DELETE_OWN_ARTICLE"
    MODERATE_ARTICLE = "MODERATE_ARTICLE"
    POST_PREMIUM_ARTICLE = "POST_PREMIUM_ARTICLE"
    ACCESS_MEMBER_ONLY_AREA = "ACCESS_MEMBER_ONLY_AREA"

    # Comments
    COMMENT = "COMMENT"
    DELETE_OWN_COMMENT = "DELETE_OWN_COMMENT"
    DELETE_COMMENT = "DELETE_COMMENT"
    DELETE_COMMENT_IN_OWN_ARTICLE = "DELETE_COMMENT_IN_OWN_ARTICLE"

    # System administration
    ADMINISTER = "ADMINISTER"
    MANAGE_ROLES = "MANAGE_ROLES"
    VIEW_AUDIT_LOGS = "VIEW_AUDIT_LOGS"

    # User management
    VIEW_USERS = "VIEW_USERS"
    EDIT_USERS = "EDIT_USERS"
    DELETE_USERS = "DELETE_USERS"
    ASSIGN_ROLES = "ASSIGN_ROLES"
    REMOVE_ROLES = "REMOVE_ROLES"

    # Separation of duty
    ASSIGN_CONFLICT_ROLE = "ASSIGN_CONFLICT_ROLE"
    ACTIVATE_CONFLICT_SESSION_ROLE = "ACTIVATE_CONFLICT_SESSION_ROLE"

    # Security and system settings
    ACCESS_SECURITY_SETTINGS = "ACCESS_SECURITY_SETTINGS"
    MODIFY_SYSTEM_SETTINGS = "MODIFY_SYSTEM_SETTINGS"
