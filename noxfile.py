import nox

PYTHON_VERSIONS = ["3.11", "3.12", "3.13"]


def _install(session: nox.Session) -> None:
    """Install the project with the test extra into the nox virtualenv."""
    session.install("-e", ".[test]")


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run full test suite across Python versions."""
    _install(session)
    session.run("pytest", *session.posargs)


@nox.session(python=PYTHON_VERSIONS)
def tests_domain(session: nox.Session) -> None:
    """Run domain-layer tests only (no HTTP layer involved)."""
    _install(session)
    session.run(
        "pytest",
        "tests/catalogue/domain/",
        "tests/ordering/domain/",
    )


@nox.session(python=PYTHON_VERSIONS[-1])
def tests_api(session: nox.Session) -> None:
    """Run the HTTP API and session gate tests."""
    _install(session)
    session.run("pytest", "-m", "integration")
