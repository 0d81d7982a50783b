# src/ptvd/records/catalog.py

"""
Intake form catalog: sections, fields and their option lists.

Connectors render forms from this catalog; the Record model stays unaware of
labels and options.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class InputKind(StrEnum):
    TEXT = "text"
    LONG_TEXT = "long_text"
    DATE = "date"
    CHOICE = "choice"  # single option (radio)
    MULTI = "multi"  # set of options (chips / checkboxes)
    CONSENT = "consent"  # checkbox that stores its own label when ticked


@dataclass(frozen=True, slots=True)
class FormField:
    attr: str  # Record attribute name
    label: str
    kind: InputKind = InputKind.TEXT
    options: tuple[str, ...] = ()
    required: bool = False
    # Only ask for this field when another field holds a given value.
    shown_when: tuple[str, str] | None = None


@dataclass(frozen=True, slots=True)
class FormSection:
    title: str
    fields: tuple[FormField, ...] = field(default_factory=tuple)


GENDER_OPTIONS = ("Nam", "Nữ", "Khác")
CURRENT_ISSUE_OPTIONS = (
    "Mụn viêm",
    "Mụn đầu đen",
    "Mụn ẩn",
    "Thâm sau mụn",
    "Sẹo rỗ",
    "Da nhạy cảm",
    "Lỗ chân lông to",
    "Dầu nhiều",
    "Da khô",
    "Da xỉn màu",
    "Nám - Tàn nhang",
    "Không chắc chắn",
)
SKIN_TYPE_OPTIONS = ("Da dầu", "Da khô", "Da hỗn hợp", "Da nhạy cảm", "Không rõ")
FOREHEAD_OPTIONS = ("Mụn ẩn", "Mụn viêm", "Dầu nhiều", "Khô", "Thâm", "Sẹo")
BROW_OPTIONS = ("Mụn", "Mẩn đỏ", "Tắc nghẽn")
NOSE_OPTIONS = ("Mụn đầu đen", "Mụn ẩn", "Lỗ chân lông to", "Dầu nhiều")
INNER_CHEEK_OPTIONS = ("Nhạy cảm", "Đỏ da", "Mụn", "Sạm")
OUTER_CHEEK_OPTIONS = ("Sạm", "Nám", "Tàn nhang", "Tổn thương nắng")
CHIN_OPTIONS = ("Mụn nội tiết", "Mụn viêm", "Mụn đầu trắng")
JAW_OPTIONS = ("Mụn nội tiết", "Mụn tiết dầu", "Mụn tái phát")
GOAL_OPTIONS = (
    "Hết mụn",
    "Giảm thâm",
    "Hết bóng dầu",
    "Se khít lỗ chân lông",
    "Cải thiện sẹo/nám",
    "Da sáng khỏe",
    "Da đều màu",
    "Routine phù hợp sinh viên",
)

NOT_YET_DONE = ("Chưa", "Rồi")
NO_YES = ("Không", "Có")
YES_NO = ("Có", "Không")

CONSENT_SKIN_CHECK = "Đồng ý khảo sát da & soi da"
CONSENT_TREATMENT = "Đồng ý tư vấn liệu trình"


def _history(attr: str, label: str, options: tuple[str, ...]) -> tuple[FormField, FormField]:
    # "Rồi"/"Có" unlocks a free-text note.
    return (
        FormField(attr, label, InputKind.CHOICE, options),
        FormField(f"{attr}_note", "Ghi chú", InputKind.TEXT, shown_when=(attr, options[1])),
    )


SECTIONS: tuple[FormSection, ...] = (
    FormSection(
        "1. THÔNG TIN CÁ NHÂN",
        (
            FormField("full_name", "Họ và tên", required=True),
            FormField("dob", "Ngày sinh", InputKind.DATE),
            FormField("gender", "Giới tính", InputKind.CHOICE, GENDER_OPTIONS),
            FormField("phone", "SĐT", required=True),
            FormField("email", "Email"),
            FormField("student_code", "Mã số sinh viên"),
            FormField("major", "Khoa / Ngành học"),
        ),
    ),
    FormSection(
        "2. TÌNH TRẠNG DA & SỨC KHỎE",
        (
            FormField("current_issues", "Tình trạng da hiện tại", InputKind.MULTI, CURRENT_ISSUE_OPTIONS),
            FormField("skin_type", "Loại da", InputKind.CHOICE, SKIN_TYPE_OPTIONS),
            *_history("history_acne_treatment", "Từng điều trị mụn?", NOT_YET_DONE),
            *_history("history_doctor_prescription", "Thuốc bác sĩ kê?", NOT_YET_DONE),
            *_history("history_retinoid", "Dùng Retinoids?", NOT_YET_DONE),
            *_history("history_allergy", "Dị ứng mỹ phẩm?", NO_YES),
        ),
    ),
    FormSection(
        "3. CHĂM SÓC & SINH HOẠT",
        (
            FormField("cleanser_times", "Sữa rửa mặt", InputKind.MULTI, ("Sáng", "Tối")),
            FormField("makeup_removal", "Tẩy trang", InputKind.CHOICE, YES_NO),
            FormField("moisturizer", "Kem dưỡng", InputKind.CHOICE, YES_NO),
            FormField("sunscreen", "Chống nắng", InputKind.CHOICE, ("Mỗi ngày", "Thỉnh thoảng", "Không")),
            FormField("sleep_well", "Ngủ đủ 7–8 tiếng", InputKind.CHOICE, YES_NO),
            FormField("stress", "Stress nhiều", InputKind.CHOICE, YES_NO),
            FormField("water_intake", "Lượng nước uống", InputKind.CHOICE, ("<1L", "1–2L", ">2L")),
            FormField("spicy_sweet", "Ăn cay / ngọt", InputKind.CHOICE, YES_NO),
            FormField("products_using", "Sản phẩm đang dùng", InputKind.LONG_TEXT),
        ),
    ),
    FormSection(
        "4. FM - ĐÁNH GIÁ VÙNG MẶT",
        (
            FormField("face_forehead", "Trán", InputKind.MULTI, FOREHEAD_OPTIONS),
            FormField("face_brow", "Giữa lông mày", InputKind.MULTI, BROW_OPTIONS),
            FormField("face_nose", "Mũi", InputKind.MULTI, NOSE_OPTIONS),
            FormField("face_inner_cheek", "Má trong", InputKind.MULTI, INNER_CHEEK_OPTIONS),
            FormField("face_outer_cheek", "Má ngoài", InputKind.MULTI, OUTER_CHEEK_OPTIONS),
            FormField("face_chin", "Cằm", InputKind.MULTI, CHIN_OPTIONS),
            FormField("face_jawline", "Đường viền hàm", InputKind.MULTI, JAW_OPTIONS),
            FormField("face_notes", "Ghi chú thêm", InputKind.LONG_TEXT),
        ),
    ),
    FormSection(
        "5. MỤC TIÊU CẢI THIỆN DA",
        (
            FormField("goals", "Mục tiêu", InputKind.MULTI, GOAL_OPTIONS),
            FormField("other_goal", "Khác"),
        ),
    ),
    FormSection(
        "6. CAM KẾT & ĐỒNG Ý",
        (
            FormField("consent_skin_check", CONSENT_SKIN_CHECK, InputKind.CONSENT),
            FormField("consent_treatment", CONSENT_TREATMENT, InputKind.CONSENT),
            FormField("sign_date", "Ngày ký phiếu", InputKind.DATE),
        ),
    ),
)


def iter_fields():
    for section in SECTIONS:
        yield from section.fields


def required_fields() -> list[FormField]:
    return [f for f in iter_fields() if f.required]
