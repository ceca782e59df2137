"""
Top-level test configuration for vcsbridge.
"""

import os

# Ensure test-friendly defaults before vcsbridge.config builds its settings
os.environ.setdefault("VCSBRIDGE_JSON_LOGS", "false")
os.environ.setdefault("VCSBRIDGE_LOG_LEVEL", "DEBUG")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
