import streamlit as st

from bluemoon.api.schemas.residents import GENDER_LABELS, GenderDTO, ResidentForm
from bluemoon.domain.exceptions import FormValidationError
from bluemoon.domain.formatting import format_date
from bluemoon.domain.labels import active_badge
from bluemoon.services.resident_service import ResidentListScreen
from bluemoon.ui.api_client import APIError, error_message, get_client
from bluemoon.ui.state import flash, require_session, show_flashes

st.title("Quản Lý Cư Dân")

require_session()
show_flashes()
screen = ResidentListScreen(get_client())


def _resident_fields(current: ResidentForm, households) -> dict:
    """Widgets shared by the create and edit dialogs."""
    household_ids = [""] + [h.id for h in households]
    names = {h.id: f"Căn hộ {h.apartment_number}" for h in households}
    genders = [None, GenderDTO.MALE, GenderDTO.FEMALE]

    c1, c2 = st.columns(2)
    values = {
        "full_name": c1.text_input("Họ tên *", value=current.full_name),
        "gender": c2.selectbox(
            "Giới tính *", genders, index=genders.index(current.gender),
            format_func=lambda g: GENDER_LABELS.get(g, "Chọn giới tính"),
        ),
        "date_of_birth": c1.date_input("Ngày sinh", value=current.date_of_birth),
        "phone": c2.text_input("Số điện thoại", value=current.phone),
        "id_card": c1.text_input("CMND/CCCD", value=current.id_card),
        "id_card_date": c2.date_input("Ngày cấp", value=current.id_card_date),
        "id_card_place": c1.text_input("Nơi cấp", value=current.id_card_place),
        "place_of_birth": c2.text_input("Nơi sinh", value=current.place_of_birth),
        "nationality": c1.text_input("Quốc tịch", value=current.nationality),
        "ethnicity": c2.text_input("Dân tộc", value=current.ethnicity),
        "religion": c1.text_input("Tôn giáo", value=current.religion),
        "occupation": c2.text_input("Nghề nghiệp", value=current.occupation),
        "workplace": c1.text_input("Nơi làm việc", value=current.workplace),
        "household_id": c2.selectbox(
            "Hộ gia đình", household_ids,
            index=household_ids.index(current.household_id) if current.household_id in household_ids else 0,
            format_func=lambda i: names.get(i, "Không thuộc hộ nào"),
        ) or None,
        "note": st.text_area("Ghi chú", value=current.note),
        "active": st.checkbox("Đang hoạt động", value=current.active),
    }
    return values


def _show_errors(errors: dict[str, str]) -> None:
    for msg in errors.values():
        st.error(msg)


@st.dialog("Thêm Cư Dân Mới", width="large")
def create_resident(household_id: str | None = None):
    current = ResidentForm.model_construct(household_id=household_id)
    with st.form("create_resident"):
        values = _resident_fields(current, screen.active_households())
        if st.form_submit_button("Thêm mới"):
            try:
                screen.create(**values)
                flash("Thêm cư dân mới thành công")
                st.rerun()
            except FormValidationError as e:
                _show_errors(e.errors)
            except APIError as e:
                st.error(error_message(e, "Không thể thêm cư dân mới"))


@st.dialog("Chỉnh Sửa Cư Dân", width="large")
def edit_resident(resident_id: str):
    try:
        current = ResidentForm.from_resident(screen.get(resident_id))
    except APIError as e:
        st.error(error_message(e, "Không thể tải thông tin cư dân"))
        return
    with st.form("edit_resident"):
        values = _resident_fields(current, screen.active_households())
        if st.form_submit_button("Cập nhật"):
            try:
                screen.update(resident_id, **values)
                flash("Cập nhật cư dân thành công")
                st.rerun()
            except FormValidationError as e:
                _show_errors(e.errors)
            except APIError as e:
                st.error(error_message(e, "Không thể cập nhật cư dân"))


@st.dialog("Thông Tin Cư Dân", width="large")
def show_resident(resident_id: str):
    try:
        r = screen.get(resident_id)
    except APIError as e:
        st.error(error_message(e, "Không thể tải thông tin cư dân"))
        return
    c1, c2 = st.columns(2)
    c1.markdown(f"**Họ tên:** {r.full_name}")
    c2.markdown(f"**Giới tính:** {GENDER_LABELS.get(r.gender, '') if r.gender else ''}")
    c1.markdown(f"**Ngày sinh:** {format_date(r.date_of_birth)}")
    c2.markdown(f"**Nơi sinh:** {r.place_of_birth or ''}")
    c1.markdown(f"**CMND/CCCD:** {r.id_card or ''}")
    c2.markdown(f"**Ngày cấp / Nơi cấp:** {format_date(r.id_card_date)} {r.id_card_place or ''}")
    c1.markdown(f"**Quốc tịch:** {r.nationality or ''}")
    c2.markdown(f"**Dân tộc / Tôn giáo:** {r.ethnicity or ''} / {r.religion or ''}")
    c1.markdown(f"**Nghề nghiệp:** {r.occupation or ''}")
    c2.markdown(f"**Nơi làm việc:** {r.workplace or ''}")
    c1.markdown(f"**Số điện thoại:** {r.phone or ''}")
    c2.markdown(f"**Căn hộ:** {r.household.apartment_number if r.household else 'Không có'}")
    if r.note:
        st.write(r.note)


@st.dialog("Xác nhận")
def confirm_delete(resident_id: str):
    st.write(screen.delete_prompt)
    c1, c2 = st.columns(2)
    if c1.button("Xóa", type="primary"):
        try:
            screen.delete(resident_id, confirm=lambda _: True)
            flash("Xóa cư dân thành công")
        except APIError as e:
            flash(error_message(e, screen.delete_error), "error")
        st.rerun()
    if c2.button("Hủy"):
        st.rerun()


# --- Toolbar ---
c1, c2 = st.columns([5, 1])
screen.search_term = c1.text_input(
    "Tìm kiếm", placeholder="Tìm theo tên, CMND/CCCD, số điện thoại hoặc căn hộ",
    label_visibility="collapsed",
)
# Arriving from a household detail page opens the form for that household.
prefill_household = st.session_state.pop("resident_household_id", None)
if c2.button("Thêm Cư Dân") or prefill_household:
    create_resident(prefill_household)

with st.spinner("Đang tải..."):
    screen.load()

if screen.error:
    st.error(screen.error)
    st.stop()

residents = screen.filtered()
if not residents:
    st.info("Không tìm thấy cư dân nào")

for r in residents:
    badge = active_badge(r.active)
    with st.container(border=True):
        c1, c2, c3, c4 = st.columns([3, 2, 2, 3])
        c1.markdown(f"**{r.full_name}**  \n{GENDER_LABELS.get(r.gender, '') if r.gender else ''}")
        c2.write(f"CMND/CCCD: {r.id_card or '—'}  \nĐT: {r.phone or '—'}")
        c3.markdown(
            f"Căn hộ: {r.household.apartment_number if r.household else '—'}  \n"
            f":{badge.color}[{badge.label}]"
        )
        b1, b2, b3 = c4.columns(3)
        if b1.button("Xem", key=f"view_{r.id}"):
            show_resident(r.id)
        if b2.button("Sửa", key=f"edit_{r.id}"):
            edit_resident(r.id)
        if b3.button("Xóa", key=f"del_{r.id}"):
            confirm_delete(r.id)
