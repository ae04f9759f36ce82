from .user import User  # noqa: F401
from .user_profile import UserProfile, UserRole  # noqa: F401
from .prompt import Prompt, PromptCategory  # noqa: F401
from .audit_log import AuditLog  # noqa: F401
