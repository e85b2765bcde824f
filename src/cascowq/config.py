"""Path settings for the Casco Bay water-quality pipeline."""

from __future__ import annotations

from pathlib import Path


def project_root() -> Path:
    return Path(__file__).resolve().parents[2]


def data_root() -> Path:
    return project_root() / "data"


def raw_dir() -> Path:
    return data_root() / "raw"


def clean_dir() -> Path:
    return data_root() / "clean"


def site_lookup_path() -> Path:
    return project_root() / "sites" / "site_names.csv"


def clean_observations_path(name: str) -> Path:
    return clean_dir() / "observations" / f"{name}.csv"


def extinction_path(name: str) -> Path:
    return clean_dir() / "extinction" / f"{name}.csv"
