"""Tests for path settings."""

from __future__ import annotations

from cascowq import config


def test_outputs_live_under_clean_data() -> None:
    """Output paths sit under the clean data directory."""
    clean = config.clean_dir()

    assert config.clean_observations_path("focb") == clean / "observations" / "focb.csv"
    assert config.extinction_path("focb") == clean / "extinction" / "focb.csv"
    assert clean.parent == config.data_root()


def test_site_lookup_path() -> None:
    """The site lookup ships with the project."""
    path = config.site_lookup_path()

    assert path == config.project_root() / "sites" / "site_names.csv"


def test_raw_and_clean_share_data_root() -> None:
    """Raw extracts and cleaned outputs sit side by side under data/."""
    assert config.raw_dir() == config.data_root() / "raw"
    assert config.raw_dir().parent == config.clean_dir().parent
