"""Pipeline run configuration.

PipelineConfig collects everything a batch run needs: where the raw extract
lives, which channels to clean, and how to estimate extinction coefficients.
It round-trips through JSON so a run can be repeated exactly.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from cascowq.schemas.extinction import MIN_PROFILE_POINTS


@dataclass
class ExtinctionConfig:
    """Settings for the extinction stage.

    Attributes:
        min_points: Smallest number of irradiance readings a profile needs
        irr_pct_col: Percent surface irradiance column
        surface_col: Deck irradiance column, used when irr_pct_col is absent
        underwater_col: Underwater irradiance column, used when irr_pct_col
            is absent
    """
    min_points: int = MIN_PROFILE_POINTS
    irr_pct_col: str = "irr_pct"
    surface_col: str = "irr_air"
    underwater_col: str = "irr_water"


@dataclass
class PipelineConfig:
    """Configuration for one batch run.

    Attributes:
        run_name: Name used for output file names
        observations_path: Raw observation extract (CSV or parquet)
        channels: Channels to clean; None means every known channel present
        irradiance_path: Light profile table; None skips the extinction stage
        site_lookup: Optional site code -> display name table
        extinction: Extinction stage settings
    """

    run_name: str
    observations_path: str
    channels: list[str] | None = None
    irradiance_path: str | None = None
    site_lookup: str | None = None
    extinction: ExtinctionConfig = field(default_factory=ExtinctionConfig)

    def __post_init__(self) -> None:
        if isinstance(self.extinction, dict):
            self.extinction = ExtinctionConfig(**self.extinction)
        self._validate()

    def _validate(self) -> None:
        errors = []

        if not self.run_name:
            errors.append("run_name must not be empty")

        if not self.observations_path:
            errors.append("observations_path must not be empty")

        if self.channels is not None and not self.channels:
            errors.append("channels must be None or a non-empty list")

        # A straight line through fewer than 3 points has no usable error
        if self.extinction.min_points < 3:
            errors.append(
                f"extinction.min_points must be >= 3, got {self.extinction.min_points}"
            )

        if errors:
            raise ValueError("PipelineConfig validation failed:\n  - " + "\n  - ".join(errors))

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def save(self, path: Path | str) -> Path:
        """Save config to JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json())
        return path

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> PipelineConfig:
        return cls(**d)

    @classmethod
    def load(cls, path: Path | str) -> PipelineConfig:
        """Load config from JSON file."""
        return cls.from_dict(json.loads(Path(path).read_text()))
