"""
hospital/store.py

HospitalStore: the single object every console screen reads from and
mutates through.

- Owns the patient, doctor, appointment and room repositories, the session
  tracker and the theme resolver.
- Read accessors hand out copies; callers change state only through the
  mutators below.
- Every state change emits ``changed(topic)`` to subscribers, where topic
  is the collection key (``"patients"``, ``"rooms"``, ``"theme"``, ...) or
  ``"session"`` for sign-in/out.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Mapping, Optional, Union

from pydantic import BaseModel

from hospital.config import DEFAULT_HISTORY_LIMIT, Settings, load_settings
from hospital.errors import ConfigError
from hospital.events import Signal, Subscription
from hospital.ids import IdGenerator
from hospital.mirror import APPOINTMENTS, DOCTORS, PATIENTS, ROOMS, THEME, DurableMirror
from hospital.repository import AppointmentRepository, EntityRepository, RoomRepository
from hospital.session import SessionTracker
from hospital.theme import ColorSchemeSignal, PreferenceResolver
from storage.kv import JsonFileStore, KeyValueStore, MemoryKeyValueStore
from storage.models import (
    Appointment,
    AppointmentCreate,
    AppointmentStatus,
    Doctor,
    DoctorCreate,
    HistoryEntry,
    Patient,
    PatientCreate,
    Room,
    RoomStatus,
    ThemePreference,
    User,
)
from storage.seed import seed_appointments, seed_doctors, seed_patients, seed_rooms

logger = logging.getLogger(__name__)

SESSION = "session"

Payload = Union[BaseModel, Mapping[str, Any]]


class HospitalStore:
    def __init__(
        self,
        kv: KeyValueStore,
        *,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        os_scheme: Optional[ColorSchemeSignal] = None,
        clock: Callable[[], datetime] = datetime.now,
        ids: Optional[IdGenerator] = None,
    ):
        self.mirror = DurableMirror(kv)
        self.ids = ids or IdGenerator()
        self.os_scheme = os_scheme or ColorSchemeSignal()
        self._changed = Signal("store-changed")

        emit = self._changed.emit
        self._patients = EntityRepository(
            PATIENTS, Patient, PatientCreate, self.mirror, self.ids, seed_patients, emit
        )
        self._doctors = EntityRepository(
            DOCTORS, Doctor, DoctorCreate, self.mirror, self.ids, seed_doctors, emit
        )
        self._appointments = AppointmentRepository(
            APPOINTMENTS, Appointment, AppointmentCreate, self.mirror, self.ids, seed_appointments, emit
        )
        self._rooms = RoomRepository(ROOMS, Room, self.mirror, seed_rooms, emit)
        self._session = SessionTracker(
            self.mirror, self.ids, limit=history_limit, clock=clock, on_change=emit
        )
        self._prefs = PreferenceResolver(self.mirror, self.os_scheme)
        self._theme_sub = self._prefs.on_resolved_change(lambda _resolved: emit(THEME))

    # -------------------------
    # Subscriptions
    # -------------------------
    def subscribe(self, callback: Callable[[str], None]) -> Subscription:
        return self._changed.subscribe(callback)

    # -------------------------
    # Read accessors (snapshots)
    # -------------------------
    @property
    def patients(self) -> list[Patient]:
        return self._patients.list()

    @property
    def doctors(self) -> list[Doctor]:
        return self._doctors.list()

    @property
    def appointments(self) -> list[Appointment]:
        return self._appointments.list()

    @property
    def rooms(self) -> list[Room]:
        return self._rooms.list()

    @property
    def login_history(self) -> list[HistoryEntry]:
        return self._session.history

    @property
    def current_user(self) -> Optional[User]:
        user = self._session.current_user
        return None if user is None else user.model_copy()

    @property
    def theme(self) -> str:
        return self._prefs.theme

    @property
    def resolved_theme(self) -> str:
        return self._prefs.resolved_theme

    @property
    def colors(self) -> dict[str, str]:
        return self._prefs.palette

    @property
    def root_classes(self) -> frozenset[str]:
        return frozenset(self._prefs.root_classes)

    def get_patient(self, patient_id: str) -> Optional[Patient]:
        return self._patients.get(patient_id)

    def get_doctor(self, doctor_id: str) -> Optional[Doctor]:
        return self._doctors.get(doctor_id)

    def get_appointment(self, appointment_id: str) -> Optional[Appointment]:
        return self._appointments.get(appointment_id)

    def get_room(self, room_id: str) -> Optional[Room]:
        return self._rooms.get(room_id)

    # -------------------------
    # Patients
    # -------------------------
    def add_patient(self, patient: Payload) -> Patient:
        return self._patients.add(patient)

    def update_patient(self, patient_id: str, changes: Mapping[str, Any]) -> None:
        self._patients.update(patient_id, changes)

    def delete_patient(self, patient_id: str) -> None:
        self._patients.delete(patient_id)

    # -------------------------
    # Doctors
    # -------------------------
    def add_doctor(self, doctor: Payload) -> Doctor:
        return self._doctors.add(doctor)

    def update_doctor(self, doctor_id: str, changes: Mapping[str, Any]) -> None:
        self._doctors.update(doctor_id, changes)

    def delete_doctor(self, doctor_id: str) -> None:
        self._doctors.delete(doctor_id)

    # -------------------------
    # Appointments
    # -------------------------
    def add_appointment(self, appointment: Payload) -> Appointment:
        return self._appointments.add(appointment)

    def update_appointment(self, appointment_id: str, changes: Mapping[str, Any]) -> None:
        self._appointments.update(appointment_id, changes)

    def delete_appointment(self, appointment_id: str) -> None:
        self._appointments.delete(appointment_id)

    def update_appointment_status(self, appointment_id: str, status: Union[AppointmentStatus, str]) -> None:
        self._appointments.update_status(appointment_id, status)

    def cancel_appointment(self, appointment_id: str) -> None:
        self._appointments.cancel(appointment_id)

    # -------------------------
    # Rooms
    # -------------------------
    def update_room_status(self, room_id: str, status: Union[RoomStatus, str]) -> None:
        self._rooms.set_status(room_id, status)

    def assign_patient_to_room(self, room_id: str, patient_name: Optional[str]) -> None:
        self._rooms.assign_patient(room_id, patient_name)

    def assign_doctor_to_room(self, room_id: str, doctor_name: Optional[str]) -> None:
        self._rooms.assign_doctor(room_id, doctor_name)

    # -------------------------
    # Session
    # -------------------------
    def login(self, user: Union[User, Mapping[str, Any]]) -> HistoryEntry:
        entry = self._session.login(user)
        self._changed.emit(SESSION)
        return entry

    def logout(self, confirm: Optional[Callable[[], bool]] = None) -> bool:
        had_user = self._session.current_user is not None
        done = self._session.logout(confirm)
        if done and had_user:
            self._changed.emit(SESSION)
        return done

    # -------------------------
    # Theme
    # -------------------------
    def set_theme(self, theme: Union[ThemePreference, str]) -> None:
        before = self._prefs.resolved_theme
        self._prefs.set_theme(theme)
        # resolved-change already announced THEME when the rendering flips
        if self._prefs.resolved_theme == before:
            self._changed.emit(THEME)

    def set_system_theme(self, scheme: str) -> None:
        """Report the OS color scheme (what a media-query listener would do)."""
        self.os_scheme.publish(scheme)

    # -------------------------
    # Maintenance
    # -------------------------
    def flush_all(self) -> bool:
        """Rewrite every tracked key.  Returns False if any write failed."""
        results = [
            self._patients.flush(),
            self._doctors.flush(),
            self._appointments.flush(),
            self._rooms.flush(),
            self._session.flush(),
            self._prefs.flush(),
        ]
        return all(results)

    def reset_to_seed(self) -> None:
        """Restore every entity collection and the login history to seed data."""
        for repo in (self._patients, self._doctors, self._appointments, self._rooms):
            repo.reset()
        self._session.reset()
        logger.info("Store reset to seed data.")

    def close(self) -> None:
        self._theme_sub.unsubscribe()
        self._prefs.close()
        self.mirror.kv.close()


def open_backend(settings: Settings) -> KeyValueStore:
    """Build the key-value backend described by *settings*."""
    if settings.backend == "memory":
        kv: KeyValueStore = MemoryKeyValueStore()
    elif settings.backend == "sqlite":
        from storage.db import SqliteKeyValueStore

        kv = SqliteKeyValueStore(settings.sqlite_path)
    else:
        kv = JsonFileStore(settings.data_dir)

    if settings.data_key:
        from storage.crypto import EncryptedKeyValueStore, build_fernet

        try:
            fernet = build_fernet(settings.data_key)
        except ValueError as exc:
            raise ConfigError(f"APP_DATA_KEY is not a valid Fernet key: {exc}") from exc
        kv = EncryptedKeyValueStore(kv, fernet)
        logger.info("Persisted collections are encrypted with APP_DATA_KEY.")
    elif settings.backend != "memory":
        logger.warning(
            "APP_DATA_KEY environment variable is not set. "
            "Patient and appointment data will be written unencrypted to %s.",
            settings.data_dir,
        )
    logger.info("Using '%s' storage backend.", settings.backend)
    return kv


def build_store(settings: Optional[Settings] = None, **kwargs: Any) -> HospitalStore:
    settings = settings or load_settings()
    return HospitalStore(open_backend(settings), history_limit=settings.history_limit, **kwargs)
