import nox

nox.options.sessions = [
    "format",
    "lint",
    "typecheck",
    "test",
]
# Create fresh isolated environments using uv backend
nox.options.reuse_existing_virtualenvs = False
nox.options.default_venv_backend = "uv"


@nox.session(python="3.12")
def fix(session: nox.Session) -> None:
    """Format and fix code issues."""
    session.install("black", "isort", "ruff")
    session.run("black", "orgcal/")
    session.run("isort", "orgcal/")
    session.run("ruff", "check", "--fix", "orgcal/")


@nox.session(python="3.12")
def format(session: nox.Session) -> None:
    """Check code formatting."""
    session.install("black", "isort")
    session.run("black", "--check", "--diff", "orgcal/")
    session.run("isort", "--check-only", "--diff", "orgcal/")


@nox.session(python="3.12")
def lint(session: nox.Session) -> None:
    """Run linting."""
    session.install("ruff")
    session.run("ruff", "check", "orgcal/")


@nox.session(python="3.12")
def typecheck(session: nox.Session) -> None:
    """Run type checking."""
    session.install("mypy")
    session.install("-e", ".[test]")
    session.run("mypy", "orgcal")


@nox.session(python="3.12")
def test(session: nox.Session) -> None:
    """Run tests for all packages."""
    session.install("-e", ".[test]")
    session.run("python", "-m", "pytest", "orgcal/", "-v", "-n", "auto", "-r", "fE")


@nox.session(python="3.12")
def test_cov(session: nox.Session) -> None:
    """Run tests with coverage."""
    session.install("-e", ".[test]")
    session.run(
        "python",
        "-m",
        "pytest",
        "orgcal",
        "--cov=orgcal",
        "--cov-report=xml:coverage.xml",
        "-v",
        "-r",
        "fE",
    )


@nox.session(python="3.12")
def migrate(session: nox.Session) -> None:
    """Apply database migrations (needs DB_URL_SCHEDULING)."""
    session.install("-e", ".[postgres]")
    session.run("alembic", "-c", "orgcal/scheduling/alembic.ini", "upgrade", "head")
