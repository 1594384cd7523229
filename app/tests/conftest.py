import sys
from pathlib import Path

# Ensure the application package root is on sys.path so importing application
# modules (e.g. `core.config`) works during pytest collection regardless of
# the directory pytest is invoked from.
project_root = str(Path(__file__).resolve().parents[1])
if project_root not in sys.path:
    sys.path.insert(0, project_root)

import core.config as core_config
import pytest


@pytest.fixture
def interpolation_settings(monkeypatch):
    """Override interpolation settings for a single test.

    Returns a setter taking keyword overrides, e.g.
    ``interpolation_settings(DEFAULT_LOCALE="fr-FR")``.
    """

    def _override(**overrides):
        updated = core_config.settings.interpolation.model_copy(update=overrides)
        monkeypatch.setattr(core_config.settings, "interpolation", updated)
        return updated

    return _override
