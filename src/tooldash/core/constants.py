"""Application-wide constants.

This module defines constants used throughout the application
to avoid magic numbers and ensure consistency.
"""

# String field lengths
MAX_NAME_LENGTH = 255
MAX_ROLE_NAME_LENGTH = 100
MAX_ROLE_TYPE_LENGTH = 32
MAX_EMPLOYEE_ID_LENGTH = 50
MAX_DEPARTMENT_LENGTH = 100
MAX_POSITION_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 255

# Secret key requirements
MIN_SECRET_KEY_LENGTH = 32
DEFAULT_INSECURE_SECRET = "change-me-in-production"

# Audience claim stamped on access tokens by the identity provider
DEFAULT_JWT_AUDIENCE = "authenticated"
