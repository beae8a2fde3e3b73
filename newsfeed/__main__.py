"""Run the newsfeed server with ``python -m newsfeed``."""

from newsfeed.main import run

run()
