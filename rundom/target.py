# rundom/target.py

from pydantic import BaseModel
from rundom.geo_point import GeoPoint

class Target(BaseModel):
    id: int
    position: GeoPoint
    captured: bool = False   # set once collected, the target is then dropped from play

    @property
    def label(self) -> str:
        return f"Star {self.id + 1}"
