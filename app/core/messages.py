"""User-facing error messages and text for the backend."""

# Authentication messages
AUTH_NOT_AUTHENTICATED = "Not authenticated"
AUTH_TOKEN_INVALID = "Could not validate credentials"
AUTH_TOKEN_PAYLOAD_INVALID = "Invalid token payload"
AUTH_USER_ID_INVALID = "Invalid user ID format"

# Authorization messages
ACCESS_ADMIN_REQUIRED = "Access denied. Admin privileges required."
ACCESS_PROFILE_OWNER_ONLY = "You can only update your own profile"

# Prompt messages
PROMPT_NOT_FOUND = "Prompt not found"
PROMPT_LIST_UNAVAILABLE = "Network error: Unable to connect to backend"

# Profile messages
PROFILE_NOT_FOUND = "Profile not found"
PROFILE_EXPIRATION_REQUIRES_TIERED_ROLE = "Expiration can only be set for vip or svip roles"
PROFILE_ASSIGNMENT_EMPTY = "Provide a role or an expiration to change"
PROFILE_CANNOT_DEMOTE_SELF = "Admins cannot remove their own admin role"

# Database messages
DB_CONNECTION_ERROR = "Storage is temporarily unavailable. Please try again."
DB_CONSTRAINT_VIOLATION = "The request conflicts with stored data"
