"""Nox sessions for the sleeper-insights test and lint suite."""

import nox


@nox.session(python=["3.11", "3.12", "3.13"])
def tests(session: nox.Session) -> None:
    """Run the test suite."""
    session.install(".[dev]")
    session.run("pytest", *session.posargs)


@nox.session
def smoke(session: nox.Session) -> None:
    """Check that the console script installs and parses its arguments."""
    session.install(".")
    session.run("sleeper-insights", "--help")
    session.run("sleeper-insights", "matchups", "--help")


@nox.session
def lint(session: nox.Session) -> None:
    """Run ruff lint and format checks."""
    session.install(".[dev]")
    session.run("ruff", "check", "src", "tests", "noxfile.py")
    session.run("ruff", "format", "--check", "src", "tests", "noxfile.py")


@nox.session
def typecheck(session: nox.Session) -> None:
    """Type-check the package."""
    session.install(".[dev]")
    session.run("mypy", "src")


@nox.session
def coverage(session: nox.Session) -> None:
    """Run tests with coverage for the sleeper_insights package."""
    session.install(".[dev]")
    session.run(
        "pytest",
        "--cov=sleeper_insights",
        "--cov-report=term-missing",
        "--cov-report=xml",
    )
