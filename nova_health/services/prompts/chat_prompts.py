"""
Wellness companion prompts for the inference service.
"""
from typing import List

from nova_health.api.models.chat import HealthData
from nova_health.api.models.medication import Medication

WELLNESS_SYSTEM_PROMPT = (
    "You are a friendly, supportive, and conversational wellness companion named Nova. "
    "Your purpose is to help users understand their health analytics and motivate them to reach their goals. "
    "You have access to the user's health data from various sources."
)

WELLNESS_GUIDANCE_PROMPT = (
    "Your responses should be empathetic and helpful. If a user asks about their progress, "
    "summarize the data and offer encouragement. Avoid giving any form of medical advice or diagnosis."
)

HEALTH_DATA_TEMPLATE = (
    "Here is the user's current health data:\n"
    "Daily Steps: {steps} steps\n"
    "BMI: {bmi}\n"
    "Pending Medications: {pending}\n"
    "Medication Alert: {reminder}"
)

NO_PENDING_MEDICATIONS = "None"
UNKNOWN_BMI = "unknown"


def format_pending_medications(medications: List[Medication]) -> str:
    """Comma-join the names of medications not yet taken, or "None"."""
    names = [med.name for med in medications if not med.taken]
    return ", ".join(names) if names else NO_PENDING_MEDICATIONS


def build_wellness_prompt(message: str, health_data: HealthData) -> str:
    """
    Compose the full prompt sent to the inference service.

    Fields are interpolated verbatim; nothing supplied by the client is
    escaped or sanitized.

    Args:
        message: The user's chat message
        health_data: Health snapshot sent by the dashboard

    Returns:
        Prompt text ending with the ``Nova:`` cue
    """
    health_block = HEALTH_DATA_TEMPLATE.format(
        steps=health_data.steps,
        bmi=health_data.bmi if health_data.bmi is not None else UNKNOWN_BMI,
        pending=format_pending_medications(health_data.medications),
        reminder=health_data.medication_reminder,
    )
    return (
        f"{WELLNESS_SYSTEM_PROMPT}\n\n"
        f"{health_block}\n\n"
        f"{WELLNESS_GUIDANCE_PROMPT}\n\n"
        f"User: {message}\n"
        "Nova:"
    )
