"""
Medication catalog endpoints.
"""
from typing import List

from fastapi import APIRouter, Depends

from nova_health.api.models import Medication
from nova_health.controllers.medication_controller import MedicationController


def get_medication_controller() -> MedicationController:
    """Dependency injection for MedicationController."""
    return MedicationController()


router = APIRouter()


@router.get("/medications", response_model=List[Medication])
async def list_medications(
    controller: MedicationController = Depends(get_medication_controller),
) -> List[Medication]:
    """Return the fixed medication list. Not backed by any store."""
    return controller.list_medications()
