"""Pytest configuration for the icuref test suite.

Hypothesis profiles (the only place max_examples is set):
- dev: 500 examples, used locally
- ci: 50 examples, derandomized, used when CI=true
- verbose: 100 examples with per-example output

HYPOTHESIS_PROFILE=<name> picks a profile explicitly, e.g.
    HYPOTHESIS_PROFILE=verbose pytest tests/

Tests marked @pytest.mark.fuzz run thousands of generated inputs against
the parser and the registry. They are skipped unless selected with
    pytest -m fuzz
"""

import os
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

from icuref.config import I18nConfig
from icuref.localization import LocaleCatalogs
from icuref.registry import InstanceRegistry

# =============================================================================
# HYPOTHESIS PROFILES
# =============================================================================

_ALL_PHASES = [Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink]

settings.register_profile("dev", max_examples=500, phases=_ALL_PHASES)
settings.register_profile(
    "ci",
    max_examples=50,
    phases=_ALL_PHASES,
    derandomize=True,
    print_blob=True,
)
settings.register_profile(
    "verbose",
    max_examples=100,
    phases=_ALL_PHASES,
    verbosity=Verbosity.verbose,
)


def _detect_profile() -> str:
    """HYPOTHESIS_PROFILE if it names a profile, else "ci" under CI, else "dev"."""
    requested = os.environ.get("HYPOTHESIS_PROFILE")
    if requested in ("dev", "ci", "verbose"):
        return requested
    return "ci" if os.environ.get("CI") == "true" else "dev"


settings.load_profile(_detect_profile())


# =============================================================================
# FUZZ MARKER
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Declare the fuzz marker."""
    config.addinivalue_line(
        "markers",
        "fuzz: long-running property tests, run only with -m fuzz",
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Skip fuzz tests unless the -m expression mentions them.

    A plain `pytest tests/` stays fast; `pytest -m fuzz` runs only the
    fuzz tests.
    """
    if "fuzz" in str(config.getoption("-m", default="")):
        return

    skip_fuzz = pytest.mark.skip(reason="fuzz test: run with pytest -m fuzz")
    for item in items:
        if "fuzz" in item.keywords:
            item.add_marker(skip_fuzz)


# =============================================================================
# SHARED FIXTURES
# =============================================================================

AUDIT_FILE = "core/audits/metrics.py"
SHARED_FILE = "lib/i18n.py"

EN_MESSAGES: dict[str, str] = {
    f"{AUDIT_FILE} | title": "Metrics",
    f"{AUDIT_FILE} | description": (
        "Collects {count, plural, one {# metric} other {# metrics}}"
    ),
    f"{SHARED_FILE} | ms": "{timeInMs, number, milliseconds}\xa0ms",
    f"{SHARED_FILE} | seconds": "{timeInMs, number, seconds}\xa0s",
    f"{SHARED_FILE} | displayValueByteSavings": (
        "Potential savings of {wastedBytes, number, bytes}\xa0KB"
    ),
    f"{SHARED_FILE} | columnURL": "URL",
    "report/renderer/util.py | passedAuditsGroupTitle": "Passed audits",
    "report/renderer/util.py | warningHeader": "Warnings: ",
}

DE_MESSAGES: dict[str, str] = {
    f"{AUDIT_FILE} | title": "Messwerte",
    f"{AUDIT_FILE} | description": (
        "Erfasst {count, plural, one {# Messwert} other {# Messwerte}}"
    ),
    f"{SHARED_FILE} | ms": "{timeInMs, number, milliseconds}\xa0ms",
    f"{SHARED_FILE} | seconds": "{timeInMs, number, seconds}\xa0s",
    f"{SHARED_FILE} | displayValueByteSavings": (
        "Mögliche Einsparung von {wastedBytes, number, bytes}\xa0KB"
    ),
    f"{SHARED_FILE} | columnURL": "URL",
    "report/renderer/util.py | passedAuditsGroupTitle": "Bestandene Audits",
}

EN_XA_MESSAGES: dict[str, str] = {
    f"{AUDIT_FILE} | title": "[Ṁéţŕîçš one]",
    f"{SHARED_FILE} | ms": "{timeInMs, number, milliseconds}\xa0ms",
}


def _catalog(messages: dict[str, str]) -> dict[str, dict[str, str]]:
    return {key: {"message": text} for key, text in messages.items()}


@pytest.fixture
def raw_catalogs() -> dict[str, dict[str, dict[str, str]]]:
    """Catalog data as loaded from JSON files."""
    return {
        "en": _catalog(EN_MESSAGES),
        "de": _catalog(DE_MESSAGES),
        "en-XA": _catalog(EN_XA_MESSAGES),
    }


@pytest.fixture
def catalogs(raw_catalogs: dict[str, dict[str, dict[str, str]]]) -> LocaleCatalogs:
    """Immutable catalogs for en, de and the en-XA pseudo-locale."""
    return LocaleCatalogs(raw_catalogs)


@pytest.fixture
def config(tmp_path: Path) -> I18nConfig:
    """Configuration rooted at a temporary project directory."""
    return I18nConfig(
        project_root=tmp_path,
        shared_strings_source=tmp_path / SHARED_FILE,
    )


@pytest.fixture
def registry(catalogs: LocaleCatalogs, config: I18nConfig) -> InstanceRegistry:
    """Empty registry over the test catalogs."""
    return InstanceRegistry(catalogs, config=config)


@pytest.fixture
def audit_file(tmp_path: Path) -> Path:
    """Path of the declaring source file inside the project root."""
    return tmp_path / AUDIT_FILE


@pytest.fixture
def audit_strings() -> dict[str, str]:
    """Declared templates of the audit source file."""
    return {
        "title": "Metrics",
        "description": "Collects {count, plural, one {# metric} other {# metrics}}",
        "undeclaredInCatalog": "Only {n} in source",
    }
