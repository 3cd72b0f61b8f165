import pandas as pd
import streamlit as st

from bluemoon.services.dashboard_service import DashboardScreen, recent_payment_rows, revenue_card_value
from bluemoon.ui.api_client import get_client
from bluemoon.ui.charts import counts_bar, revenue_pie, trend_line
from bluemoon.ui.state import require_session

st.title("Bảng Điều Khiển Quản Lý")

require_session()

screen = DashboardScreen(get_client())
with st.spinner("Đang tải..."):
    stats = screen.load()

if screen.error:
    st.error(screen.error)
    st.stop()

charts = screen.charts

# --- Summary Cards ---
c1, c2, c3, c4 = st.columns(4)
c1.metric("Hộ Gia Đình", stats.counts.households)
c1.page_link("pages/2_households.py", label="Xem Chi Tiết →")
c2.metric("Cư Dân", stats.counts.residents)
c2.page_link("pages/4_residents.py", label="Xem Chi Tiết →")
c3.metric("Loại Phí", stats.counts.fees)
c3.page_link("pages/5_fees.py", label="Xem Chi Tiết →")
c4.metric("Doanh Thu", revenue_card_value(stats.financials), help=charts.month_name)
c4.page_link("pages/6_payments.py", label="Xem Chi Tiết →")

st.divider()

# --- Revenue share & counts ---
left, right = st.columns(2)
with left:
    st.subheader("Tỷ Lệ Doanh Thu")
    st.caption(f"{charts.month_name} theo loại phí")
    if not stats.financials.revenue_by_type:
        st.info("Không có dữ liệu doanh thu tháng này")
    else:
        st.plotly_chart(
            revenue_pie(charts.revenue_by_type, stats.financials.display_month_name),
            use_container_width=True, key="dash_pie",
        )
with right:
    st.subheader("Thống Kê Số Lượng")
    st.caption("Số lượng hộ gia đình và cư dân")
    st.plotly_chart(counts_bar(charts.counts), use_container_width=True, key="dash_bar")

# --- Trend ---
st.subheader("Biểu Đồ Doanh Thu")
st.caption("6 tháng gần nhất")
st.plotly_chart(trend_line(charts.monthly_trend), use_container_width=True, key="dash_line")

st.divider()

# --- Recent payments ---
st.subheader("Phí Đã Thanh Toán Gần Đây")
rows = recent_payment_rows(stats)
if not rows:
    st.info("Không tìm thấy thanh toán gần đây")
else:
    st.dataframe(pd.DataFrame(rows), hide_index=True, use_container_width=True)
