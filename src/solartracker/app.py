"""Dual-axis solar tracker — Streamlit app with a live 3D scene."""

import datetime
import html
import logging

import streamlit as st
from dotenv import load_dotenv
from streamlit_js_eval import streamlit_js_eval

load_dotenv()

from solartracker.compute import InputError, default_form, run_form  # noqa: E402
from solartracker.i18n import t  # noqa: E402
from solartracker.models import FormInput, TrackingMode  # noqa: E402
from solartracker.renderers.plotly_3d import render_plotly_scene  # noqa: E402
from solartracker.renderers.summary import metric_rows  # noqa: E402
from solartracker.settings import configure_logging, load_settings  # noqa: E402

_settings = load_settings()
configure_logging(_settings.log_level)
logger = logging.getLogger(__name__)

# --- Browser locale and UTC offset (via streamlit-js-eval) ---
# Both are read once and cached in session_state. On the first run the JS
# calls return None; the rerun triggered by streamlit_js_eval fills them in.
if "lang" not in st.session_state:
    _browser_lang: str | None = streamlit_js_eval(
        js_expressions="navigator.language", key="_lang_detect", height=0
    )
    if _browser_lang is not None:
        st.session_state.lang = (
            "fr" if _browser_lang.lower().startswith("fr") else "en"
        )

if "browser_offset" not in st.session_state:
    _offset_min = streamlit_js_eval(
        js_expressions="-new Date().getTimezoneOffset()", key="_tz_detect", height=0
    )
    if _offset_min is not None:
        st.session_state.browser_offset = float(_offset_min) / 60.0

_lang: str = st.session_state.get("lang", _settings.lang)

st.set_page_config(
    page_title=t("page_title", _lang),
    page_icon="☀",
    layout="wide",
    initial_sidebar_state="collapsed",
)

# --- Session state initialization ---
if "result" not in st.session_state:
    st.session_state.result = None
if "error_msg" not in st.session_state:
    st.session_state.error_msg = None
if "default_form" not in st.session_state and "browser_offset" in st.session_state:
    st.session_state.default_form = default_form(
        _settings,
        datetime.datetime.now(datetime.timezone.utc),
        st.session_state.browser_offset,
    )

# --- Dark theme CSS ---
st.markdown(
    """
    <style>
    html, body, [data-testid="stAppViewContainer"], [data-testid="stMain"] {
        background: linear-gradient(135deg, #020617 0%, #0f172a 55%, #1e3a8a 100%) !important;
    }
    [data-testid="stHeader"], [data-testid="stToolbar"] {
        display: none !important;
    }
    [data-testid="stMainBlockContainer"] {
        padding-top: 1.2rem !important;
    }
    label, [data-testid="stWidgetLabel"] p {
        color: #cbd5e1 !important;
        font-size: 0.78rem !important;
        text-transform: uppercase;
        letter-spacing: 0.04em;
    }
    .panel-card {
        background: rgba(255,255,255,0.08);
        border-radius: 16px;
        padding: 1rem 1.2rem;
        color: #f1f5f9;
        margin-bottom: 0.8rem;
    }
    .metrics-grid {
        display: grid;
        grid-template-columns: 1fr 1fr;
        gap: 0.8rem;
    }
    .metrics-grid dt {
        color: #94a3b8;
        font-size: 0.7rem;
        text-transform: uppercase;
        letter-spacing: 0.05em;
    }
    .metrics-grid dd {
        margin: 0;
        font-size: 1.1rem;
    }
    .error-box {
        border: 1px solid #ff6b6b;
        color: #ff9999;
        border-radius: 10px;
        padding: 0.6rem 0.9rem;
        margin-bottom: 0.8rem;
    }
    </style>
    """,
    unsafe_allow_html=True,
)

# Guard: skip rendering until the browser offset is resolved and defaults are ready.
if "default_form" not in st.session_state:
    st.stop()

_defaults: FormInput = st.session_state.default_form

controls_col, scene_col = st.columns([1, 3])

# --- Input panel ---
with controls_col:
    st.markdown(
        f"<div class='panel-card'><h3 style='margin:0'>{t('page_title', _lang)}</h3>"
        f"<p style='color:#cbd5e1;font-size:0.85rem;margin:0.3rem 0 0'>{t('intro', _lang)}</p></div>",
        unsafe_allow_html=True,
    )

    st.markdown(f"#### {t('section_site', _lang)}")
    c1, c2 = st.columns(2)
    with c1:
        latitude = st.number_input(
            t("label_latitude", _lang),
            value=_defaults.latitude,
            min_value=-90.0,
            max_value=90.0,
            step=0.1,
            format="%.4f",
        )
        utc_offset = st.number_input(
            t("label_utc_offset", _lang),
            value=_defaults.utc_offset,
            min_value=-12.0,
            max_value=14.0,
            step=0.5,
        )
        time_val = st.time_input(
            t("label_time", _lang),
            value=datetime.datetime.strptime(_defaults.time, "%H:%M").time(),
            step=300,
        )
    with c2:
        longitude = st.number_input(
            t("label_longitude", _lang),
            value=_defaults.longitude,
            min_value=-180.0,
            max_value=180.0,
            step=0.1,
            format="%.4f",
        )
        date_val = st.date_input(
            t("label_date", _lang),
            value=datetime.datetime.strptime(_defaults.date, "%Y-%m-%d").date(),
        )
        albedo = st.slider(
            t("label_albedo", _lang),
            min_value=0.1,
            max_value=0.9,
            value=_defaults.albedo,
            step=0.05,
        )

    st.markdown(f"#### {t('section_panel', _lang)}")
    _mode_labels = {
        TrackingMode.AUTO: t("mode_auto", _lang),
        TrackingMode.MANUAL: t("mode_manual", _lang),
    }
    mode = st.radio(
        t("label_mode", _lang),
        options=list(_mode_labels),
        format_func=_mode_labels.__getitem__,
        horizontal=True,
    )
    manual = mode == TrackingMode.MANUAL

    panel_width = st.number_input(
        t("label_width", _lang), value=_defaults.panel_width, min_value=0.5, step=0.1
    )
    panel_height = st.number_input(
        t("label_height", _lang), value=_defaults.panel_height, min_value=0.5, step=0.1
    )
    mast_height = st.number_input(
        t("label_mast", _lang), value=_defaults.mast_height, min_value=0.5, step=0.1
    )
    manual_yaw = st.slider(
        t("label_yaw", _lang),
        min_value=0,
        max_value=360,
        value=int(_defaults.manual_yaw),
        disabled=not manual,
    )
    manual_pitch = st.slider(
        t("label_pitch", _lang),
        min_value=0,
        max_value=90,
        value=int(_defaults.manual_pitch),
        disabled=not manual,
    )

# --- Recompute on every rerun (any widget change triggers one) ---
form = FormInput(
    latitude=latitude,
    longitude=longitude,
    utc_offset=utc_offset,
    date=date_val.strftime("%Y-%m-%d"),
    time=time_val.strftime("%H:%M"),
    tracking_mode=str(mode),
    manual_pitch=float(manual_pitch),
    manual_yaw=float(manual_yaw),
    panel_width=panel_width,
    panel_height=panel_height,
    mast_height=mast_height,
    albedo=albedo,
)
try:
    st.session_state.result = run_form(form, _settings.sun_path_step_minutes)
    st.session_state.error_msg = None
except InputError as e:
    logger.warning(f"Rejected input: {e}")
    st.session_state.error_msg = t("error_input", _lang).format(
        error=html.escape(str(e))
    )

# --- Metrics card ---
with controls_col:
    if st.session_state.error_msg:
        st.markdown(
            f"<div class='error-box'>{st.session_state.error_msg}</div>",
            unsafe_allow_html=True,
        )
    if st.session_state.result is not None:
        _cells = "".join(
            f"<div><dt>{html.escape(label)}</dt><dd>{value}</dd></div>"
            for label, value in metric_rows(st.session_state.result, _lang)
        )
        st.markdown(
            f"<div class='panel-card'><h4 style='margin:0 0 0.6rem'>{t('metrics_title', _lang)}</h4>"
            f"<dl class='metrics-grid'>{_cells}</dl>"
            f"<p style='color:#94a3b8;font-size:0.7rem;margin:0.6rem 0 0'>{t('flux_caption', _lang)}</p></div>",
            unsafe_allow_html=True,
        )

# --- Scene ---
with scene_col:
    if st.session_state.result is not None:
        fig = render_plotly_scene(st.session_state.result, lang=_lang)
        st.plotly_chart(
            fig,
            use_container_width=True,
            config={"scrollZoom": True, "displayModeBar": False},
        )
