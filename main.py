"""Streamlit entrypoint for the forecast dashboard."""

from __future__ import annotations

import sys
from pathlib import Path

# --- Ensure src is on path for local imports ---
ROOT = Path(__file__).resolve().parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.append(str(SRC))

import streamlit as st  # noqa: E402

from forecast_dash import ForecastView, InstrumentType  # noqa: E402
from forecast_dash.config import MODEL_CHOICES, load_settings  # noqa: E402
from forecast_dash.data import HttpPredictionClient  # noqa: E402
from forecast_dash.domain import MAX_HORIZON, MIN_HORIZON  # noqa: E402
from forecast_dash.services import FormController, clamp_horizon  # noqa: E402
from forecast_dash.utils import get_logger  # noqa: E402
from forecast_dash.viz import make_forecast_chart, make_overlay_chart  # noqa: E402


def get_controller() -> FormController:
    # One controller per browser session; a reload starts from scratch.
    if "controller" not in st.session_state:
        settings = load_settings()
        get_logger("forecast_dash", settings.log_level)
        st.session_state.controller = FormController(HttpPredictionClient(settings))
    return st.session_state.controller


def _index(options: list[str], value: str | None) -> int:
    return options.index(value) if value in options else 0


def render_instrument_fields(controller: FormController) -> None:
    types = list(InstrumentType)
    chosen_type = st.selectbox(
        "Type",
        options=types,
        index=types.index(controller.selection.type),
        format_func=lambda item: item.label,
    )
    if chosen_type is not controller.selection.type:
        controller.change_type(chosen_type)

    selection = controller.selection
    catalog = controller.catalog

    if selection.type is InstrumentType.EQUITY:
        symbols = catalog.symbols
        symbol = st.selectbox("Symbol", options=symbols, index=_index(symbols, selection.symbol), key="symbol_stock")
        if symbol != selection.symbol:
            controller.change_symbol(symbol)
        return

    # Keys follow the active type and base so the widgets are rebuilt from the
    # controller's defaults whenever a transition resets them.
    bases = catalog.bases(selection.type)
    base = st.selectbox(
        "Base currency",
        options=bases,
        index=_index(bases, selection.base_currency),
        key=f"base_{selection.type.value}",
    )
    if base != selection.base_currency:
        controller.change_base_currency(base)

    selection = controller.selection
    targets = catalog.targets(selection.type, selection.base_currency)
    target = st.selectbox(
        "Target currency",
        options=targets,
        index=_index(targets, selection.target_currency),
        key=f"target_{selection.type.value}_{selection.base_currency}",
    )
    if target != selection.target_currency:
        controller.change_target_currency(target)


def render_form(controller: FormController) -> None:
    st.header("Forecasting")
    with st.container(border=True):
        render_instrument_fields(controller)

        models = list(MODEL_CHOICES)
        model = st.selectbox(
            "Forecasting model",
            options=models,
            index=_index(models, controller.model),
            format_func=MODEL_CHOICES.get,
        )
        controller.set_model(model)

        horizon = st.number_input(
            f"Number of forecast days (at most {MAX_HORIZON})",
            min_value=MIN_HORIZON,
            max_value=MAX_HORIZON,
            value=controller.horizon,
            step=1,
        )
        controller.set_horizon(clamp_horizon(horizon))

        # submit() finishes within this script run, so Streamlit cannot take a
        # second click until it returns; the controller guard backs that up.
        if st.button("Get forecast", type="primary"):
            with st.spinner("Requesting forecast..."):
                controller.submit()


def render_results(view: ForecastView | None) -> None:
    if view is None:
        return

    if view.metrics.available:
        st.subheader("Accuracy")
        col_rmse, col_mae = st.columns(2)
        col_rmse.metric("RMSE", f"{view.metrics.rmse:.4f}")
        col_mae.metric("MAE", f"{view.metrics.mae:.4f}")

    if view.result:
        st.info(view.result)

    if view.has_forecast:
        st.subheader("Forecasts")
        st.dataframe(
            view.forecast_table.rename(columns={"date": "Date", "predicted_close_price": "Predicted close"}),
            hide_index=True,
            width="stretch",
        )


def render_charts(view: ForecastView | None) -> None:
    if view is None:
        return

    if view.has_forecast:
        with st.container(border=True):
            st.subheader("Forecast chart")
            st.plotly_chart(make_forecast_chart(view.forecast_table, view.forecast_range), use_container_width=True)

    if view.has_overlay:
        with st.container(border=True):
            st.subheader("Historical data and forecast")
            st.plotly_chart(make_overlay_chart(view.overlay), use_container_width=True)


def main() -> None:
    st.set_page_config(page_title="Forecast Dashboard", layout="wide")
    st.title("Forecasts for stocks, cryptocurrencies and forex")

    controller = get_controller()
    col_form, col_charts = st.columns(2)

    with col_form:
        render_form(controller)
        if controller.error:
            st.error(controller.error)
        render_results(controller.view)

    with col_charts:
        render_charts(controller.view)


if __name__ == "__main__":
    main()
