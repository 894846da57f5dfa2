"""
Constants
Centralised storage for result sentinels, cause identifiers and the
environment variable names used for source-control resolution.
"""
# Result sentinels
INPROGRESS = "INPROGRESS"
UNKNOWN = "unknown"

# Started-by sentinels
ANONYMOUS = "anonymous"
SYSTEM = "system"

# Cause identifiers reported as startedUserId
UPSTREAM = "upstream"
SCM = "scm"
TIMER = "timer"

# SCM environment variables
GIT_URL = "GIT_URL"
GIT_BRANCH = "GIT_BRANCH"
GIT_COMMIT = "GIT_COMMIT"
SVN_URL = "SVN_URL"
SVN_REVISION = "SVN_REVISION"

BUILDS_RESOURCE = "builds"
