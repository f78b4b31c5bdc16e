# designer/ui_components.py
# Streamlit renderers for every component the model can ask for. Each takes
# the validated props model and a session key unique to that rendered instance.

import logging

import pandas as pd
import streamlit as st

from designer.budget import (
    COST_RECOMMENDATIONS, BudgetSummary, budget_excel_filename, budget_pdf_filename,
    full_report_pdf_filename,
)
from designer.charts import budget_pie_chart, comparison_bar_chart, spending_trend_chart
from designer.comparison import comparison_rows, resolve_designs
from designer.excel_generator import generate_budget_excel
from designer.palette import (
    ColorPalette, json_filename, palette_json, palette_png, palette_text, pdf_filename,
    png_filename, text_filename,
)
from designer.pdf_reports import build_budget_pdf, build_full_report_pdf, build_palette_pdf
from designer.room_templates import BUDGET, LUXURY, MINIMALIST, ROOM_TEMPLATES, ar_template
from designer.utils import format_currency
from designer.visualizer import create_room_view, release_room_views

logger = logging.getLogger(__name__)

PDF_MIME = "application/pdf"
XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
REPORTED_FAILURES_KEY = 'reported_export_failures'


# ==================== EXPORT HELPERS ====================
def _notify(message):
    st.toast(message)


def export_download_button(label, builder, file_name, mime, key, success_message):
    """
    Build an export and offer it for download. A failed build is logged,
    reported once with a toast and leaves a disabled button in place.
    """
    try:
        data = builder()
    except Exception as e:
        logger.error(f"Export failed for {file_name}: {e}", exc_info=True)
        reported = st.session_state.setdefault(REPORTED_FAILURES_KEY, set())
        if key not in reported:
            reported.add(key)
            st.toast(f"❌ Error generating {file_name}. Please try again.")
        st.button(label, key=key, disabled=True, use_container_width=True)
        return False

    st.download_button(
        label=label,
        data=data,
        file_name=file_name,
        mime=mime,
        key=key,
        on_click=_notify,
        args=(success_message,),
        use_container_width=True,
    )
    return True


def release_stale_components(state, active_prefix):
    """Forget room scenes, prepared exports and reported failures of components no longer shown."""
    released = release_room_views(state, active_prefix)
    reported = state.get(REPORTED_FAILURES_KEY)
    if reported:
        state[REPORTED_FAILURES_KEY] = {key for key in reported if key.startswith(active_prefix)}
    if released:
        logger.debug(f"Released {len(released)} stale room view entries")
    return released


def _swatch_html(hex_color, size=56):
    return (
        f"<div style='width:100%;height:{size}px;background:{hex_color};"
        f"border-radius:10px;border:1px solid #e5e7eb;'></div>"
    )


# ==================== 3D ROOMS ====================
def _room_renderer(template):
    def render(props, key):
        create_room_view(key, template, props.colors())
        with st.expander("🎨 Room colors"):
            colors = props.colors()
            cols = st.columns(min(len(colors), 4))
            for index, (prop, hex_color) in enumerate(colors.items()):
                with cols[index % len(cols)]:
                    st.markdown(_swatch_html(hex_color, 28), unsafe_allow_html=True)
                    st.caption(f"{prop.replace('_color', '').replace('_', ' ').title()}: `{hex_color}`")
    render.__name__ = f"render_room_{template.style}"
    return render


render_room_luxury = _room_renderer(LUXURY)
render_room_budget = _room_renderer(BUDGET)
render_room_minimalist = _room_renderer(MINIMALIST)


def render_room_ar(props, key):
    st.info("📱 AR placement preview. Open on a WebXR-capable device to place furniture in your room; "
            "here the layout is shown as an interactive 3D scene.")
    items = [item.model_dump() for item in props.furniture_items]
    create_room_view(key, ar_template(items, props.floor_color))
    st.caption(f"{len(items)} item(s) placed")


# ==================== BUDGET ====================
def render_budget_breakdown(props, key):
    summary = BudgetSummary.from_props(props.total_budget, props.spent, props.furniture,
                                       props.decor, props.labor)
    room, design = props.room_name, props.design_type

    st.subheader(f"💵 {room} - {design} Budget")

    col1, col2, col3 = st.columns(3)
    col1.metric("Total Budget", format_currency(summary.total_budget))
    col2.metric("Spent", format_currency(summary.spent))
    col3.metric("Remaining", format_currency(summary.remaining),
                delta=f"{100 - summary.utilization_pct}% left")

    st.progress(summary.progress_fraction, text=f"Budget Usage: {summary.utilization_pct}%")
    if summary.is_over_budget:
        st.error(summary.status_message())
    else:
        st.success(summary.status_message())

    chart_col, table_col = st.columns([3, 2])
    with chart_col:
        st.plotly_chart(budget_pie_chart(summary), use_container_width=True, key=f"{key}::pie")
    with table_col:
        st.dataframe(pd.DataFrame(summary.to_records()), hide_index=True, use_container_width=True)

    col1, col2 = st.columns(2)
    with col1:
        export_download_button(
            "📄 Export PDF",
            lambda: build_budget_pdf(summary, room, design),
            budget_pdf_filename(room, design), PDF_MIME, f"{key}::pdf",
            "✅ PDF downloaded successfully!",
        )
    with col2:
        export_download_button(
            "📊 Export Excel",
            lambda: generate_budget_excel(summary, room, design),
            budget_excel_filename(room, design), XLSX_MIME, f"{key}::xlsx",
            "✅ Excel workbook downloaded!",
        )

    with st.expander("📈 Full Report"):
        _render_full_report(summary, room, design, key)


def _render_full_report(summary: BudgetSummary, room, design, key):
    overview_tab, trend_tab, compare_tab, tips_tab = st.tabs(
        ["Overview", "Spending Trend", "Comparison", "Recommendations"])

    with overview_tab:
        for stat in summary.key_statistics():
            st.markdown(f"- {stat}")

    with trend_tab:
        st.plotly_chart(spending_trend_chart(), use_container_width=True, key=f"{key}::trend")

    with compare_tab:
        st.plotly_chart(comparison_bar_chart(summary), use_container_width=True, key=f"{key}::compare")
        st.dataframe(pd.DataFrame(summary.category_comparison()), hide_index=True,
                     use_container_width=True)

    with tips_tab:
        for rec in COST_RECOMMENDATIONS:
            st.markdown(f"**{rec['title']}**: save {format_currency(rec['saving'])} ({rec['impact']})")

    export_download_button(
        "📑 Download Full Report",
        lambda: build_full_report_pdf(summary, room, design),
        full_report_pdf_filename(room, design), PDF_MIME, f"{key}::full_pdf",
        "✅ Full report downloaded successfully!",
    )


# ==================== FURNITURE ====================
def render_furniture_grid(props, key):
    st.subheader(f"🛋️ {props.title}")
    cols = st.columns(props.columns)
    for index, item in enumerate(props.items):
        with cols[index % props.columns]:
            with st.container(border=True):
                st.image(str(item.image), use_container_width=True)
                st.markdown(f"**{item.name}**")
                st.caption(item.store)
                price_col, rating_col = st.columns(2)
                price_col.markdown(f"**{format_currency(item.price)}**")
                rating_col.markdown(f"⭐ {item.rating}")
    total = sum(item.price for item in props.items)
    st.metric("Total for listed items", format_currency(total))


# ==================== PALETTE ====================
def render_color_palette(props, key):
    palette = ColorPalette.from_props(props.primary, props.secondary, props.accent,
                                      props.neutral, props.dark, props.palette_name)
    st.subheader(f"🎨 {palette.name}")
    st.caption("Copy any hex code with the button beside it")

    cols = st.columns(len(palette.swatches))
    for col, swatch in zip(cols, palette.swatches):
        with col:
            st.markdown(_swatch_html(swatch.hex, 90), unsafe_allow_html=True)
            st.markdown(f"**{swatch.name}**")
            st.code(swatch.hex, language=None)
            st.caption(swatch.description)

    st.info("💡 Pro Tip: 60-30-10 Rule. 60% Primary, 30% Secondary, 10% Accent.")

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        export_download_button("📝 TXT", lambda: palette_text(palette), text_filename(palette),
                               "text/plain", f"{key}::txt", "✅ Color codes downloaded!")
    with col2:
        export_download_button("🧾 JSON", lambda: palette_json(palette), json_filename(palette),
                               "application/json", f"{key}::json", "✅ Palette JSON downloaded!")
    with col3:
        export_download_button("🖼️ PNG", lambda: palette_png(palette), png_filename(palette),
                               "image/png", f"{key}::png", "✅ Palette image downloaded!")
    with col4:
        export_download_button("📄 PDF", lambda: build_palette_pdf(palette), pdf_filename(palette),
                               PDF_MIME, f"{key}::pdf", "✅ Palette PDF downloaded!")


# ==================== COMPARISON ====================
def render_design_comparison(props, key):
    designs = resolve_designs(props)
    tabs = st.tabs([f"{design.icon} {design.name}" for design in designs])

    for tab, design in zip(tabs, designs):
        with tab:
            st.markdown(f"### {props.room_name} - {design.name} Style")
            if st.toggle("Show 3D room", key=f"{key}::{design.key}::show3d"):
                create_room_view(f"{key}::{design.key}", ROOM_TEMPLATES[design.key], height=480)
            else:
                primary = design.colors.get('primary', '#cccccc')
                secondary = design.colors.get('secondary', primary)
                st.markdown(
                    f"<div style='height:220px;border-radius:12px;border:1px solid #e5e7eb;"
                    f"background:linear-gradient(135deg, {primary} 0%, {secondary} 100%);'></div>",
                    unsafe_allow_html=True,
                )

            col1, col2 = st.columns([2, 3])
            with col1:
                st.metric("Total Investment", format_currency(design.price))
                st.write(design.description)
                st.info(f"**PERFECT FOR**\n\n{design.best_for}")
            with col2:
                st.markdown("**Highlights**")
                for highlight in design.highlights:
                    st.markdown(f"✓ {highlight}")
                st.markdown("**Color Scheme**")
                swatch_cols = st.columns(max(len(design.colors), 1))
                for swatch_col, (name, hex_color) in zip(swatch_cols, design.colors.items()):
                    with swatch_col:
                        st.markdown(_swatch_html(hex_color, 40), unsafe_allow_html=True)
                        st.caption(name.capitalize())

    st.markdown("#### Compare All 3 Styles")
    st.dataframe(pd.DataFrame(comparison_rows(designs)), hide_index=True, use_container_width=True)
