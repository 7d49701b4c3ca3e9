"""
Controller for the medication catalog.

The catalog is a fixed list; there is no backing store.
"""
from typing import List

from nova_health.api.models.medication import Medication

DEFAULT_MEDICATIONS = (
    Medication(id="1", name="Lisinopril (10mg)", taken=True, time="08:00"),
    Medication(id="2", name="Metformin (500mg)", taken=True, time="12:00"),
    Medication(id="3", name="Atorvastatin (20mg)", taken=False, time="20:00"),
)


class MedicationController:
    """Controller for medication catalog operations."""

    def list_medications(self) -> List[Medication]:
        """Return fresh copies of the catalog records, in order."""
        return [med.model_copy() for med in DEFAULT_MEDICATIONS]
