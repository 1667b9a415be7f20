# models/location.py
from pydantic import BaseModel

# provinces / cities
SELECTABLE_LEVEL = 2


class Location(BaseModel):
    id: int
    name: str
    code: str
    tags: str = ""
    level: int

    @property
    def selectable(self) -> bool:
        return self.level == SELECTABLE_LEVEL
