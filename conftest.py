"""Global pytest configuration."""

import os

# Point the planner client at an unroutable host before any imports
os.environ.setdefault("PLANNER_API_URL", "http://planner.test/api")
os.environ.setdefault("LOG_LEVEL", "WARNING")
