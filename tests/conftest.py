"""Test configuration and fixtures for the storefront service."""

from tests.fixtures import *  # noqa: F401,F403
