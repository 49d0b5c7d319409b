"""Configuration for integration tests.

Integration tests run against a live Avatica server (for example the
reference avatica-server backed by SQLite) and are skipped unless
AVATICA_TEST_URL is set.

Example:
    export AVATICA_TEST_URL=http://localhost:8080/
    export AVATICA_TEST_TABLE=test
"""

import os

# Avatica endpoint; integration tests are skipped when unset
TEST_URL = os.environ.get("AVATICA_TEST_URL")

TEST_USER = os.environ.get("AVATICA_TEST_USER")
TEST_PASSWORD = os.environ.get("AVATICA_TEST_PASSWORD")

# Scratch table created and emptied by the integration tests
TEST_TABLE = os.environ.get("AVATICA_TEST_TABLE", "avatica_client_test")
