"""
Local state of the Nova dashboard.

Everything here lives in memory on the client side: nothing is synced to
the gateway except the health snapshot that rides along with each chat
message.
"""
import logging
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from pathlib import Path
from typing import Dict, List, Literal, Optional, Union

import httpx
from pydantic import BaseModel, Field

from nova_health.api.models import ChatRequest, HealthData, Medication
from nova_health.config.settings import get_settings

from .client import GatewayClient

logger = logging.getLogger(__name__)

STEP_GOAL = 10000
STEP_INCREMENT = 500
GREETING = "Hi {name} 👋 How are you feeling today?"
ALL_TAKEN_REMINDER = "All medications have been taken for the day."


class Tab(str, Enum):
    AGENT = "agent"
    NUTRITION = "nutrition"
    RECORDS = "records"
    PROFILE = "profile"


class TranscriptEntry(BaseModel):
    origin: Literal["user", "agent"]
    text: str


DEFAULT_PREFERENCES = (
    "Medication Reminders",
    "Fitness Nudges",
    "Nutrition Suggestions",
    "Emotional Check-ins",
)


class UserProfile(BaseModel):
    """Account details shown on the profile tab."""
    name: str = "Alex Johnson"
    email: str = "alex@example.com"
    wellness_score: int = 78
    preferences: Dict[str, bool] = Field(
        default_factory=lambda: {pref: True for pref in DEFAULT_PREFERENCES}
    )

    @property
    def first_name(self) -> str:
        return self.name.split()[0] if self.name.strip() else self.name


def default_medications() -> List[Medication]:
    return [
        Medication(name="Lisinopril (10mg)", taken=True, time="08:00"),
        Medication(name="Metformin (500mg)", taken=True, time="12:00"),
        Medication(name="Atorvastatin (20mg)", taken=False, time="20:00"),
    ]


class Dashboard:
    """In-memory dashboard: profile, chat transcript, medications, steps, BMI and meal photo."""

    def __init__(
        self,
        steps: int = 3842,
        height_cm: float = 170,
        weight_kg: float = 70,
        medications: Optional[List[Medication]] = None,
        user_id: Optional[str] = None,
        profile: Optional[UserProfile] = None,
    ):
        self.profile = profile or UserProfile()
        self.active_tab = Tab.AGENT
        self.transcript: List[TranscriptEntry] = [
            TranscriptEntry(origin="agent", text=GREETING.format(name=self.profile.first_name))
        ]
        self.medications = medications if medications is not None else default_medications()
        self.steps = steps
        self.height_cm = height_cm
        self.weight_kg = weight_kg
        self.meal_photo: Optional[Path] = None
        self.user_id = user_id if user_id is not None else get_settings().dashboard_user_id

    # ------------------------------------------------------------------
    # Tabs
    # ------------------------------------------------------------------

    def select_tab(self, tab: Union[Tab, str]) -> Tab:
        self.active_tab = Tab(tab)
        return self.active_tab

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------

    def toggle_preference(self, preference: str) -> bool:
        """Flip a profile preference. Unknown preferences raise KeyError."""
        preferences = self.profile.preferences
        if preference not in preferences:
            raise KeyError(f"Unknown preference: {preference}")
        preferences[preference] = not preferences[preference]
        return preferences[preference]

    # ------------------------------------------------------------------
    # Medications
    # ------------------------------------------------------------------

    def add_medication(self, name: str) -> Optional[Medication]:
        """Append a not-yet-taken medication. Blank names are ignored."""
        if not name or not name.strip():
            return None
        medication = Medication(name=name.strip(), taken=False)
        self.medications.append(medication)
        return medication

    def toggle_medication(self, index: int) -> Medication:
        """Flip the taken flag of the medication at ``index``."""
        medication = self.medications[self._check_index(index)]
        medication.taken = not medication.taken
        return medication

    def delete_medication(self, index: int) -> Medication:
        return self.medications.pop(self._check_index(index))

    def _check_index(self, index: int) -> int:
        if not 0 <= index < len(self.medications):
            raise IndexError(f"No medication at position {index}")
        return index

    @property
    def next_medication(self) -> Optional[Medication]:
        return next((med for med in self.medications if not med.taken), None)

    @property
    def medication_reminder(self) -> str:
        upcoming = self.next_medication
        if upcoming is None:
            return ALL_TAKEN_REMINDER
        at_time = f" at {upcoming.time}" if upcoming.time else ""
        return f"Next medication due soon: {upcoming.name}{at_time}."

    # ------------------------------------------------------------------
    # Fitness
    # ------------------------------------------------------------------

    def add_steps(self, amount: int = STEP_INCREMENT) -> int:
        """Add steps, never going past the daily goal."""
        self.steps = min(STEP_GOAL, self.steps + amount)
        return self.steps

    def reset_steps(self) -> int:
        self.steps = 0
        return self.steps

    def set_steps(self, value: int) -> int:
        # Direct sets are not clamped
        self.steps = value
        return self.steps

    @property
    def step_progress(self) -> float:
        """Percentage of the step goal, clamped to [0, 100]."""
        return max(0.0, min(100.0, self.steps / STEP_GOAL * 100))

    @property
    def bmi(self) -> Decimal:
        value = Decimal(str(self.weight_kg)) / (Decimal(str(self.height_cm)) / 100) ** 2
        return value.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)

    @property
    def bmi_category(self) -> str:
        bmi = self.bmi
        if bmi < Decimal("18.5"):
            return "Underweight"
        if bmi < 25:
            return "Normal"
        if bmi < 30:
            return "Overweight"
        return "Obese"

    # ------------------------------------------------------------------
    # Nutrition
    # ------------------------------------------------------------------

    def attach_meal_photo(self, path: Union[str, Path]) -> Path:
        """Keep a local reference to a meal photo for preview; it is never uploaded."""
        photo = Path(path)
        if not photo.is_file():
            raise FileNotFoundError(f"Meal photo not found: {photo}")
        self.meal_photo = photo
        return photo

    def clear_meal_photo(self) -> None:
        self.meal_photo = None

    # ------------------------------------------------------------------
    # Chat
    # ------------------------------------------------------------------

    def health_snapshot(self) -> HealthData:
        return HealthData(
            steps=self.steps,
            bmi=self.bmi,
            medications=[med.model_copy() for med in self.medications],
            medication_reminder=self.medication_reminder,
        )

    def build_chat_request(self, message: str) -> ChatRequest:
        return ChatRequest(
            message=message,
            user_id=self.user_id,
            health_data=self.health_snapshot(),
        )

    def send(self, message: str, client: GatewayClient) -> Optional[TranscriptEntry]:
        """
        Send a chat message and append both sides to the transcript.

        Returns the agent's transcript entry, or None for blank input.
        """
        if not message or not message.strip():
            return None

        self.transcript.append(TranscriptEntry(origin="user", text=message))
        request = self.build_chat_request(message)

        try:
            result = client.chat(request)
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Failed to send message: {e}")
            text = f"Error: {e}"
        else:
            if result.ok:
                text = result.reply or ""
            else:
                text = f"Server error: {result.reply or result.reason}"

        entry = TranscriptEntry(origin="agent", text=text)
        self.transcript.append(entry)
        return entry
