"""Shared constants for the acceptance-test harness."""

from __future__ import annotations

from typing import Final

# Default number of times to retry where retries are useful
STANDARD_RETRY_COUNT: Final[int] = 10
# Minimum number of times to retry where retries are useful
MINIMUM_RETRY_COUNT: Final[int] = 2

# Seconds before an HTTP request made by the harness is abandoned
HTTP_REQUEST_TIMEOUT: Final[int] = 60

# The remote server-under-test might or might not have this directory.
# If it does not exist, the tests may end up creating it.
ACCEPTANCE_TEST_DIR_ON_REMOTE_SERVER: Final[str] = "tests/acceptance"

# Must NOT already exist on the remote server-under-test.  Acceptance tests
# may do anything in this directory and delete it when done.
TEMPORARY_STORAGE_DIR_ON_REMOTE_SERVER: Final[str] = (
    f"{ACCEPTANCE_TEST_DIR_ON_REMOTE_SERVER}/server_tmp"
)
