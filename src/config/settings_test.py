"""Settings for the pytest suite.

Supplies the values that ``config.settings`` refuses to default.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DEBUG", "False")

from config.settings import *  # noqa: E402,F401,F403
