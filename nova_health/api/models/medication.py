"""
Medication record model shared by the catalog endpoint and the dashboard.
"""
from typing import Optional

from pydantic import BaseModel


class Medication(BaseModel):
    """A medication entry.

    Records from the catalog carry an ``id``; entries added on the
    dashboard are identified only by their position in the list.
    """
    id: Optional[str] = None
    name: str
    taken: bool = False
    time: Optional[str] = None
