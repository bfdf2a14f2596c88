"""Exit codes shared by CLI commands."""

ACCEPTED_EXIT_CODE = 0
REJECTED_EXIT_CODE = 1
VALIDATION_EXIT_CODE = 2
SYSTEM_EXIT_CODE = 3
