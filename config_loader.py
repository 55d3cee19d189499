# config_loader.py

from pathlib import Path
from typing import List, Optional
import yaml
import polars as pl
from pydantic import BaseModel, Field
from rundom.geo_point import GeoPoint

CONFIG_PATH = Path("config/config.yaml")
TRACK_PATH = Path("config/tracks/walk.csv")


# ---------- Config Dataclasses ----------

class SessionConfig(BaseModel):
    radius_m: float = Field(500.0, gt=0)
    target_count: int = Field(5, ge=1)
    capture_threshold_m: float = Field(10.0, ge=0)
    max_attempts: int = Field(10_000, ge=1)
    seed: Optional[int] = None


class WalkerConfig(BaseModel):
    step_m: float = Field(1.5, gt=0)
    max_steps: int = Field(5000, ge=1)


class StartConfig(BaseModel):
    latitude: float = Field(0.0, ge=-90, le=90)
    longitude: float = Field(0.0, ge=-180, le=180)

    def to_point(self) -> GeoPoint:
        return GeoPoint(self.latitude, self.longitude)


class Config(BaseModel):
    session: SessionConfig = Field(default_factory=SessionConfig)
    walker: WalkerConfig = Field(default_factory=WalkerConfig)
    start: StartConfig = Field(default_factory=StartConfig)

# ---------- Loaders ----------

def load_config(path: Path = CONFIG_PATH) -> Config:
    with path.open("r") as f:
        raw = yaml.safe_load(f) or {}
    return Config(**raw)


def _load_points(path: Path) -> List[GeoPoint]:
    df = pl.read_csv(path)

    # Clean column names
    df.columns = [col.strip() for col in df.columns]
    return [GeoPoint(float(row["latitude"]), float(row["longitude"]))
            for row in df.select(["latitude", "longitude"]).to_dicts()]


def load_track(path: Path = TRACK_PATH) -> List[GeoPoint]:
    """Recorded observer positions, in replay order."""
    return _load_points(path)


def load_targets(path: Path) -> List[GeoPoint]:
    """Fixed star positions, in id order."""
    return _load_points(path)
