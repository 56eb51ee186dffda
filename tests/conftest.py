"""Shared test fixtures and configuration."""

import tempfile
from pathlib import Path

import pytest
from loguru import logger

from gims.config import GimsConfig


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def quiet_logging():
    """Silence loguru output during tests."""
    logger.remove()
    yield
    logger.remove()


@pytest.fixture
def no_credentials_config():
    """Configuration with no API keys (local heuristics only)."""
    return GimsConfig()


@pytest.fixture
def all_credentials_config():
    """Configuration with an API key for every provider."""
    return GimsConfig(
        credentials={
            "GEMINI_API_KEY": "gemini-test-key",
            "OPENAI_API_KEY": "openai-test-key",
            "GROQ_API_KEY": "groq-test-key",
        }
    )


@pytest.fixture
def sample_diff():
    """Staged diff adding one file and modifying another."""
    return """diff --git a/new_file.py b/new_file.py
new file mode 100644
index 0000000..e69de29
--- /dev/null
+++ b/new_file.py
@@ -0,0 +1,5 @@
+def hello():
+    print("Hello, world!")
+
+def goodbye():
+    print("Goodbye!")
diff --git a/existing_file.py b/existing_file.py
index 1234567..abcdefg 100644
--- a/existing_file.py
+++ b/existing_file.py
@@ -1,5 +1,8 @@
 def main():
-    print("old")
+    print("new")
+
+def helper():
+    return True
"""


@pytest.fixture
def new_file_diff():
    """Diff that only adds app.js."""
    return """diff --git a/app.js b/app.js
new file mode 100644
index 0000000..1111111
--- /dev/null
+++ b/app.js
@@ -0,0 +1,3 @@
+const express = require("express");
+const app = express();
+app.listen(3000);
"""


@pytest.fixture
def removal_diff():
    """Diff removing 25 lines and adding 2 in one file."""
    removed = "\n".join(f"-    legacy_line_{i}()" for i in range(25))
    return (
        "diff --git a/src/utils.py b/src/utils.py\n"
        "index 2222222..3333333 100644\n"
        "--- a/src/utils.py\n"
        "+++ b/src/utils.py\n"
        "@@ -1,27 +1,4 @@\n"
        " def run():\n"
        f"{removed}\n"
        "+    modern_line()\n"
        "+    return True\n"
    )
