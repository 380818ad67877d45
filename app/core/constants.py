"""Core constants: shared literal values.

Single source of truth for defaults used by several layers (DRY).
"""

# Route prefix for the versioned API
API_V1_PREFIX = "/api/v1"

# Storage key of the image every user starts with
DEFAULT_USER_IMAGE = "default_user_image.png"

# Records created together with every new company
DEFAULT_DEPARTMENT_NAME = "Cascade"
ADMIN_JOB_TITLE = "Company Admin"
ADMIN_JOB_DESCRIPTION = "Responsible for managing the company in Cascade."
