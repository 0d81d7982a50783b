# src/ptvd/records/models.py

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import StrEnum
from typing import Any

RecordId = int | str

# JSON key used for the remote identifier inside the stored/remote payload.
REMOTE_ID_KEY = "supabaseId"


class FieldKind(StrEnum):
    """How a Record attribute is (de)serialized."""

    ID = "id"
    TEXT = "text"
    MULTI = "multi"


def _id(key: str) -> Any:
    return field(default=None, metadata={"key": key, "kind": FieldKind.ID})


def _text(key: str) -> Any:
    return field(default="", metadata={"key": key, "kind": FieldKind.TEXT})


def _multi(key: str) -> Any:
    return field(default_factory=list, metadata={"key": key, "kind": FieldKind.MULTI})


@dataclass(slots=True)
class Record:
    """
    One consultation intake.

    Attributes map 1:1 to camelCase keys of the JSON payload that is stored in
    the local snapshot and in the remote `data` column. Keys this class does
    not know about are kept in `extra` and written back untouched.
    """

    id: RecordId | None = _id("id")
    remote_id: RecordId | None = _id(REMOTE_ID_KEY)

    # 1. personal info
    full_name: str = _text("fullName")
    dob: str = _text("dob")
    gender: str = _text("gender")
    phone: str = _text("phone")
    email: str = _text("email")
    student_code: str = _text("studentCode")
    major: str = _text("major")

    # 2. skin & health
    current_issues: list[str] = _multi("currentIssues")
    skin_type: str = _text("skinType")
    history_acne_treatment: str = _text("historyAcneTreatment")
    history_acne_treatment_note: str = _text("historyAcneTreatmentNote")
    history_doctor_prescription: str = _text("historyDoctorPrescription")
    history_doctor_prescription_note: str = _text("historyDoctorPrescriptionNote")
    history_retinoid: str = _text("historyRetinoid")
    history_retinoid_note: str = _text("historyRetinoidNote")
    history_allergy: str = _text("historyAllergy")
    history_allergy_note: str = _text("historyAllergyNote")

    # 3. care & lifestyle
    cleanser_times: list[str] = _multi("cleanserTimes")
    makeup_removal: str = _text("makeupRemoval")
    moisturizer: str = _text("moisturizer")
    sunscreen: str = _text("sunscreen")
    sleep_well: str = _text("sleepWell")
    stress: str = _text("stress")
    water_intake: str = _text("waterIntake")
    spicy_sweet: str = _text("spicySweet")
    products_using: str = _text("productsUsing")

    # 4. face map
    face_forehead: list[str] = _multi("faceForehead")
    face_brow: list[str] = _multi("faceBrow")
    face_nose: list[str] = _multi("faceNose")
    face_inner_cheek: list[str] = _multi("faceInnerCheek")
    face_outer_cheek: list[str] = _multi("faceOuterCheek")
    face_chin: list[str] = _multi("faceChin")
    face_jawline: list[str] = _multi("faceJawline")
    face_notes: str = _text("faceNotes")

    # 5. goals
    goals: list[str] = _multi("goals")
    other_goal: str = _text("otherGoal")

    # 6. consent
    consent_skin_check: str = _text("consentSkinCheck")
    consent_treatment: str = _text("consentTreatment")
    sign_date: str = _text("signDate")

    # derived / bookkeeping
    created_at: str = _text("createdAt")
    main_issues: str = _text("mainIssues")
    main_goal: str = _text("mainGoal")

    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for f in _MULTI_FIELDS:
            setattr(self, f.name, _as_tags(getattr(self, f.name)))

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for f in _KEYED_FIELDS:
            value = getattr(self, f.name)
            out[f.metadata["key"]] = list(value) if f.metadata["kind"] == FieldKind.MULTI else value
        for key, value in self.extra.items():
            out.setdefault(key, value)
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Record:
        kwargs: dict[str, Any] = {}
        known: set[str] = set()
        for f in _KEYED_FIELDS:
            key = f.metadata["key"]
            known.add(key)
            raw = data.get(key)
            kind = f.metadata["kind"]
            if kind == FieldKind.ID:
                kwargs[f.name] = _as_id(raw)
            elif kind == FieldKind.MULTI:
                kwargs[f.name] = _as_tags(raw)
            else:
                kwargs[f.name] = _as_text(raw)
        kwargs["extra"] = {k: v for k, v in data.items() if k not in known}
        return cls(**kwargs)


_KEYED_FIELDS = tuple(f for f in fields(Record) if "key" in f.metadata)
_MULTI_FIELDS = tuple(f for f in _KEYED_FIELDS if f.metadata["kind"] == FieldKind.MULTI)


def _as_text(raw: Any) -> str:
    if raw is None:
        return ""
    if isinstance(raw, str):
        return raw
    return str(raw)


def _as_id(raw: Any) -> RecordId | None:
    if raw is None or raw == "":
        return None
    if isinstance(raw, bool):
        return str(raw)
    if isinstance(raw, (int, str)):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    return str(raw)


def _as_tags(raw: Any) -> list[str]:
    if raw is None:
        return []
    if isinstance(raw, str):
        raw = [raw] if raw.strip() else []
    if not isinstance(raw, (list, tuple, set)):
        return []
    out: list[str] = []
    for item in raw:
        tag = _as_text(item)
        if tag and tag not in out:
            out.append(tag)
    return out


def toggle_tag(tags: list[str], tag: str) -> list[str]:
    """Return a new tag list with `tag` added (at the end) or removed."""
    if tag in tags:
        return [t for t in tags if t != tag]
    return [*tags, tag]


def derive_main_issues(current_issues: list[str]) -> str:
    return ", ".join(current_issues or [])


def derive_main_goal(goals: list[str]) -> str:
    return (goals or [""])[0]


def same_id(a: RecordId | None, b: RecordId | None) -> bool:
    """Compare ids loosely: 1700000000000 and "1700000000000" are the same record."""
    if a is None or b is None:
        return False
    return str(a) == str(b)
