"""
hospital/repository.py

In-memory repositories, one per entity type, each mirrored to durable
storage on every change.

A missing id is never an error: update/delete/status calls on an unknown
id leave the collection untouched and write nothing.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, Iterator, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, TypeAdapter

from hospital.errors import UnknownFieldError
from hospital.ids import IdGenerator
from hospital.mirror import DurableMirror
from storage.models import Appointment, AppointmentStatus, Room, RoomStatus

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class Collection(Generic[M]):
    """Ordered, hydrated collection of one model type plus its mirror plumbing."""

    def __init__(
        self,
        key: str,
        model: Type[M],
        mirror: DurableMirror,
        seed: Callable[[], list[M]],
        on_change: Optional[Callable[[str], None]] = None,
    ):
        self.key = key
        self.model = model
        self._mirror = mirror
        self._seed = seed
        self._adapter = TypeAdapter(list[model])
        self._on_change = on_change
        self._items: list[M] = mirror.hydrate(key, self._adapter, seed)

    # -------------------------
    # Reads (snapshots)
    # -------------------------
    def list(self) -> list[M]:
        return [item.model_copy(deep=True) for item in self._items]

    def get(self, item_id: str) -> Optional[M]:
        index = self._index(item_id)
        return None if index is None else self._items[index].model_copy(deep=True)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[M]:
        return iter(self.list())

    def _index(self, item_id: str) -> Optional[int]:
        for i, item in enumerate(self._items):
            if item.id == item_id:
                return i
        return None

    # -------------------------
    # Writes
    # -------------------------
    def _commit(self) -> None:
        self._mirror.save(self.key, self._adapter, self._items)
        if self._on_change is not None:
            self._on_change(self.key)

    def _modify(self, item_id: str, change: Callable[[M], M]) -> bool:
        index = self._index(item_id)
        if index is None:
            logger.debug("%s: no item with id=%s; nothing changed", self.key, item_id)
            return False
        current = self._items[index]
        updated = change(current)
        if updated == current:
            return False
        self._items[index] = updated
        self._commit()
        return True

    def flush(self) -> bool:
        return self._mirror.save(self.key, self._adapter, self._items)

    def reset(self) -> None:
        self._items = self._seed()
        self._commit()


class EntityRepository(Collection[M]):
    """
    add / update / delete for Patients, Doctors and Appointments.

    ``create_model`` is the entity without ``id``; unknown or invalid fields
    raise before anything is mutated.
    """

    def __init__(
        self,
        key: str,
        model: Type[M],
        create_model: Type[BaseModel],
        mirror: DurableMirror,
        ids: IdGenerator,
        seed: Callable[[], list[M]],
        on_change: Optional[Callable[[str], None]] = None,
    ):
        super().__init__(key, model, mirror, seed, on_change)
        self.create_model = create_model
        self._ids = ids
        self._ids.observe(item.id for item in self._items)
        self._fields = {}
        for name, info in model.model_fields.items():
            self._fields[name] = name
            if info.alias:
                self._fields[info.alias] = name

    def add(self, payload: Union[BaseModel, Mapping[str, Any]]) -> M:
        """Append a new entity and return it with its generated id."""
        if isinstance(payload, BaseModel):
            payload = payload.model_dump(exclude={"id"})
        data = self.create_model.model_validate(payload).model_dump()
        entity = self.model(id=self._ids.next_id(), **data)
        self._items.append(entity)
        self._commit()
        logger.info("%s: added id=%s", self.key, entity.id)
        return entity.model_copy(deep=True)

    def _normalise_changes(self, changes: Mapping[str, Any]) -> dict[str, Any]:
        out = {}
        for field, value in changes.items():
            name = self._fields.get(field)
            if name is None:
                raise UnknownFieldError(f"{self.model.__name__} has no field '{field}'.")
            if name != "id":
                out[name] = value
        return out

    def update(self, item_id: str, changes: Mapping[str, Any]) -> None:
        """Overwrite only the supplied fields of the entity with *item_id*."""
        fields = self._normalise_changes(changes)
        if not fields:
            return

        def apply(current: M) -> M:
            if not self._allows(current, fields):
                return current
            return self.model.model_validate({**current.model_dump(), **fields})

        self._modify(item_id, apply)

    def _allows(self, current: M, fields: dict[str, Any]) -> bool:
        return True

    def delete(self, item_id: str) -> None:
        index = self._index(item_id)
        if index is None:
            logger.debug("%s: delete of unknown id=%s ignored", self.key, item_id)
            return
        del self._items[index]
        self._commit()
        logger.info("%s: deleted id=%s", self.key, item_id)


# Allowed appointment status moves.  Anything else, including re-applying the
# current status, leaves the appointment untouched.
_TRANSITIONS = {
    AppointmentStatus.scheduled.value: {
        AppointmentStatus.completed.value,
        AppointmentStatus.cancelled.value,
    },
    AppointmentStatus.completed.value: set(),
    AppointmentStatus.cancelled.value: set(),
}


class AppointmentRepository(EntityRepository[Appointment]):
    def _allows(self, current: Appointment, fields: dict[str, Any]) -> bool:
        if "status" not in fields:
            return True
        target = AppointmentStatus(fields["status"]).value
        if target == current.status or target in _TRANSITIONS[current.status]:
            return True
        logger.debug(
            "%s: id=%s cannot move from %s to %s; ignored",
            self.key, current.id, current.status, target,
        )
        return False

    def update_status(self, item_id: str, status: Union[AppointmentStatus, str]) -> None:
        self.update(item_id, {"status": AppointmentStatus(status).value})

    def cancel(self, item_id: str) -> None:
        self.update_status(item_id, AppointmentStatus.cancelled)


class RoomRepository(Collection[Room]):
    """
    Ward rooms.  Maintains the occupancy invariant: a room with a patient
    name is Occupied with at least one bed taken; a room without one is
    Available with no beds taken.
    """

    def set_status(self, room_id: str, status: Union[RoomStatus, str]) -> None:
        value = RoomStatus(status).value
        self._modify(room_id, lambda r: r.model_copy(update={"status": value}))

    def assign_patient(self, room_id: str, patient_name: Optional[str]) -> None:
        def apply(room: Room) -> Room:
            if patient_name:
                return room.model_copy(update={
                    "current_patient": patient_name,
                    "status": RoomStatus.occupied.value,
                    "occupied_beds": room.occupied_beds or 1,
                })
            return room.model_copy(update={
                "current_patient": None,
                "status": RoomStatus.available.value,
                "occupied_beds": 0,
            })

        self._modify(room_id, apply)

    def assign_doctor(self, room_id: str, doctor_name: Optional[str]) -> None:
        self._modify(
            room_id,
            lambda r: r.model_copy(update={"assigned_doctor": doctor_name or None}),
        )
