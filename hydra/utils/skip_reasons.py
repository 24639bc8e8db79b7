"""
Skip Reasons
============
Standardised constants for why a file, template or candidate was dropped
during an injection run.

Used in log messages and in ``InjectionAgent.skipped`` so callers can see
why a run delivered fewer bugs than requested without treating it as an error.
"""


# ---------------------------------------------------------------------------
# Skip Reason Constants
# ---------------------------------------------------------------------------
READ_FAILURE = "READ_FAILURE"
PARSE_FAILURE = "PARSE_FAILURE"
TEMPLATE_FAILURE = "TEMPLATE_FAILURE"
INJECT_FAILURE = "INJECT_FAILURE"
GENERATE_FAILURE = "GENERATE_FAILURE"
NO_OP = "NO_OP"
INVALID_OUTPUT = "INVALID_OUTPUT"
WRITE_FAILURE = "WRITE_FAILURE"
STALE_POINT = "STALE_POINT"
