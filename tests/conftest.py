"""Test harness plumbing."""

import sys

import pytest


@pytest.hookimpl(tryfirst=True)
def pytest_sessionfinish(session, exitstatus):
    # pytest's tmp_path cleanup uses recursive shutil.rmtree; the
    # deeper-than-recursion-limit scanner test leaves a tree it cannot
    # remove at the default limit. Raised only after all tests ran.
    sys.setrecursionlimit(max(sys.getrecursionlimit(), 10000))
