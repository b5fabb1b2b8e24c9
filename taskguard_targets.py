# taskguard_targets.py
# Targets for working on taskguard itself: lint, tests, and the built-in catalog.
from __future__ import annotations

from taskguard.catalog import builtin_targets
from taskguard.dsl import category, collect, sh, target


def targets():
    return collect(
        category(
            "Project",
            # Lint - runs ruff on the codebase
            target("lint", sh("ruff check src/"), help="Lint the code"),

            # Format check - ensures code is properly formatted
            target("format-check", sh("ruff format --check src/"), help="Check formatting"),

            # Tests - installs the package then runs pytest
            target(
                "test",
                sh("pip install -e '.[test]'"),
                sh("pytest -q"),
                help="Run the test suite",
            ),
            target("ci", needs=["lint", "format-check"], help="Lint and format checks"),
        ),
        builtin_targets(),
    )
