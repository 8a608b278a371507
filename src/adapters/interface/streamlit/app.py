"""Streamlit dashboard entry point."""

from collections.abc import Sequence
from datetime import date
from decimal import Decimal

import streamlit as st
import altair as alt

from src.adapters.interface.streamlit.wealth_chart import (
    build_plotly_figure,
    build_wealth_chart_model,
)
from src.application.use_cases.latest_request import LatestRequestGate
from src.domain.errors import DataStoreUnavailableError, FinanceError
from src.domain.models import (
    BucketSnapshot,
    CategoryBreakdown,
    CategoryTotal,
    DashboardView,
    ExpenseOverview,
    IncomeOverview,
    InsightsReport,
)
from src.domain.services.periods import DATE_PRESETS, resolve_preset_range
from src.infrastructure.container import (
    build_dashboard_summary_use_case,
    build_expense_breakdown_use_case,
    build_income_breakdown_use_case,
    build_insights_use_case,
    build_wealth_evolution_use_case,
)
from src.infrastructure.logging.logger import get_usage_logger
from src.infrastructure.settings import FinanceSettings

CUSTOM_RANGE = "custom"
PRESET_LABELS = {
    "7days": "Last 7 days",
    "30days": "Last 30 days",
    "90days": "Last 90 days",
    "6months": "Last 6 months",
    "1year": "Last year",
    "thisMonth": "This month",
    "lastMonth": "Last month",
    "thisYear": "This year",
    CUSTOM_RANGE: "Custom range",
}
CURRENCY_SYMBOLS = {"BRL": "R$", "EUR": "€", "USD": "$"}
EXTRA_LABELS = {
    "vehicle_depreciation": "Vehicle depreciation",
    "ipva": "IPVA",
    "iptu": "IPTU",
    "retirement_contributions": "Retirement contributions",
}


def _check_altair_dependencies() -> tuple[bool, str | None]:
    """Check that the numpy/pandas installs Altair relies on are usable.

    Returns:
        Tuple with a success flag and an error message when unusable.
    """
    import numpy
    import pandas

    if not hasattr(numpy, "ndarray"):
        return False, "numpy is installed but incomplete (missing ndarray)."
    if not hasattr(pandas, "Timestamp"):
        return False, "pandas is installed but incomplete (missing Timestamp)."
    return True, None


def _fetch_dashboard(
    owner_id: str,
    start_date: date | None,
    end_date: date | None,
) -> DashboardView:
    """Fetch the dashboard summary for the selected period."""
    use_case = build_dashboard_summary_use_case()
    return use_case.execute(owner_id, start_date=start_date, end_date=end_date)


@st.cache_data(show_spinner=False, ttl=60)
def _load_dashboard(
    owner_id: str,
    start_date: date | None,
    end_date: date | None,
    schema_version: int = 1,
) -> DashboardView:
    """Cached wrapper around _fetch_dashboard."""
    _ = schema_version
    return _fetch_dashboard(owner_id, start_date, end_date)


def _fetch_wealth_evolution(
    owner_id: str,
    start_date: date | None,
    end_date: date | None,
) -> list[BucketSnapshot]:
    """Fetch wealth snapshots for the selected period."""
    use_case = build_wealth_evolution_use_case()
    return use_case.execute(owner_id, start_date=start_date, end_date=end_date)


@st.cache_data(show_spinner=False, ttl=60)
def _load_wealth_evolution(
    owner_id: str,
    start_date: date | None,
    end_date: date | None,
    schema_version: int = 1,
) -> list[BucketSnapshot]:
    """Cached wrapper around _fetch_wealth_evolution."""
    _ = schema_version
    return _fetch_wealth_evolution(owner_id, start_date, end_date)


def _fetch_income_breakdown(
    owner_id: str,
    start_date: date | None,
    end_date: date | None,
) -> IncomeOverview:
    """Fetch income categories and estimated tax for the selected period."""
    use_case = build_income_breakdown_use_case()
    return use_case.execute(owner_id, start_date=start_date, end_date=end_date)


@st.cache_data(show_spinner=False, ttl=60)
def _load_income_breakdown(
    owner_id: str,
    start_date: date | None,
    end_date: date | None,
) -> IncomeOverview:
    """Cached wrapper around _fetch_income_breakdown."""
    return _fetch_income_breakdown(owner_id, start_date, end_date)


def _fetch_expense_overview(
    owner_id: str,
    start_date: date | None,
    end_date: date | None,
) -> ExpenseOverview:
    """Fetch the expense overview for the selected period."""
    use_case = build_expense_breakdown_use_case()
    return use_case.execute(owner_id, start_date=start_date, end_date=end_date)


@st.cache_data(show_spinner=False, ttl=60)
def _load_expense_overview(
    owner_id: str,
    start_date: date | None,
    end_date: date | None,
) -> ExpenseOverview:
    """Cached wrapper around _fetch_expense_overview."""
    return _fetch_expense_overview(owner_id, start_date, end_date)


def _fetch_insights(owner_id: str) -> InsightsReport:
    """Fetch rule-based insights for the owner."""
    return build_insights_use_case().execute(owner_id)


@st.cache_data(show_spinner=False, ttl=300)
def _load_insights(owner_id: str) -> InsightsReport:
    """Cached wrapper around _fetch_insights."""
    return _fetch_insights(owner_id)


def _format_currency(value: Decimal, currency_code: str) -> str:
    """Format currency values for display."""
    symbol = CURRENCY_SYMBOLS.get(currency_code, currency_code)
    return f"{symbol} {value:,.2f}"


def _format_percent(value: Decimal) -> str:
    return f"{value:.1f}%"


def _request_gate() -> LatestRequestGate:
    """Return the session's latest-request gate.

    Streamlit starts a new script run when a widget changes, possibly while
    the previous run is still inside a loader. Both runs share this gate
    through ``st.session_state``, so the older run finds its ticket
    superseded and renders nothing. Within a single run the gate never
    discards anything.
    """
    if "request_gate" not in st.session_state:
        st.session_state["request_gate"] = LatestRequestGate()
    return st.session_state["request_gate"]


def _select_period(
    default_preset: str,
    today: date,
) -> tuple[date | None, date | None]:
    """Render the period selector and return the selected bounds."""
    options = [*DATE_PRESETS, CUSTOM_RANGE]
    index = options.index(default_preset) if default_preset in options else 1
    preset = st.sidebar.selectbox(
        "Period",
        options,
        index=index,
        format_func=lambda value: PRESET_LABELS.get(value, value),
    )
    if preset != CUSTOM_RANGE:
        selected = resolve_preset_range(preset, today)
        return selected.start, selected.end
    default_range = resolve_preset_range(default_preset, today)
    start_date = st.sidebar.date_input("Start", value=default_range.start)
    end_date = st.sidebar.date_input("End", value=default_range.end)
    if start_date > end_date:
        st.sidebar.warning("Start date is after end date.")
    return start_date, end_date


def _prepare_donut_chart_data(
    breakdown: CategoryBreakdown,
    currency_code: str,
    max_categories: int = 6,
) -> list[dict[str, str | float]]:
    """Prepare donut chart data with a Top-N + Other grouping.

    Args:
        breakdown: Category totals sorted by descending amount.
        currency_code: Currency used for labels.
        max_categories: Maximum categories to keep before grouping into Other.

    Returns:
        Altair-ready chart data.
    """
    top_items = list(breakdown.categories[:max_categories])
    other_items = breakdown.categories[max_categories:]
    if other_items:
        other_amount = sum(
            (item.amount for item in other_items),
            start=Decimal("0"),
        )
        other_share = sum(
            (item.percentage for item in other_items),
            start=Decimal("0"),
        )
        if other_amount != 0:
            top_items.append(
                CategoryTotal(
                    category="Other",
                    amount=other_amount,
                    percentage=other_share,
                )
            )
    return [
        {
            "category": item.category,
            "amount": float(item.amount),
            "amount_label": _format_currency(item.amount, currency_code),
            "share_label": _format_percent(item.percentage),
        }
        for item in top_items
    ]


def _render_category_chart(
    breakdown: CategoryBreakdown,
    title: str,
    currency_code: str,
    max_categories: int = 6,
    chart_size: int = 320,
    palette: Sequence[str] | None = None,
) -> None:
    """Render a donut chart of amounts by category.

    Args:
        breakdown: Category totals.
        title: Chart title to display above the donut.
        currency_code: Currency used for labels.
        max_categories: Maximum categories before grouping into Other.
        chart_size: Width/height for the chart canvas.
        palette: Optional color palette override.
    """
    st.subheader(title)
    if not breakdown.categories or breakdown.total == 0:
        st.info("No amounts available for the chart.")
        return
    ok, message = _check_altair_dependencies()
    if not ok:
        st.warning(f"Chart unavailable: {message}")
        return

    data = _prepare_donut_chart_data(
        breakdown,
        currency_code,
        max_categories=max_categories,
    )
    palette_scale = list(
        palette
        or [
            "#1b9aaa",
            "#2e7d32",
            "#f4a261",
            "#e76f51",
            "#457b9d",
            "#f6c453",
            "#6c8ead",
            "#a0c4ff",
        ]
    )
    hover = alt.selection_point(
        name="hover",
        fields=["category"],
        on="view:mouseover",
        clear="view:mouseout",
        empty=False,
    )
    base = alt.Chart(alt.Data(values=data)).mark_arc(
        innerRadius=chart_size * 0.4,
        cornerRadius=8,
        padAngle=0.02,
        stroke="#0f1115",
        strokeWidth=2,
    ).encode(
        theta=alt.Theta("amount:Q"),
        color=alt.Color(
            "category:N",
            scale=alt.Scale(range=palette_scale),
            legend=alt.Legend(
                orient="bottom",
                title=None,
                direction="horizontal",
                columns=2,
                labelLimit=180,
            ),
        ),
        opacity=alt.condition(hover, alt.value(1.0), alt.value(0.25)),
        order=alt.Order("amount:Q", sort="descending"),
        tooltip=[
            alt.Tooltip("category:N"),
            alt.Tooltip("amount_label:N"),
            alt.Tooltip("share_label:N"),
        ],
    )
    hover_text = alt.Chart(alt.Data(values=data)).transform_filter(
        hover
    ).mark_text(
        align="center",
        baseline="middle",
        fontSize=16,
        fontWeight="bold",
        color="#f5f7ff",
    ).encode(
        text="amount_label:N"
    )
    chart = alt.layer(base, hover_text).add_params(hover).properties(
        width=chart_size,
        height=chart_size,
    ).configure_view(
        stroke=None
    ).configure_legend(
        labelColor="#e7ecf3"
    )
    st.altair_chart(chart, width="stretch")


def _render_period_indicator(view: DashboardView) -> None:
    if view.start_date is None or view.end_date is None:
        st.caption("Showing general data.")
        return
    period = f"{view.start_date:%d/%m/%Y} - {view.end_date:%d/%m/%Y}"
    if view.date_filter_applied:
        st.caption(f"Income and expenses for {period}.")
    else:
        st.caption(
            f"No income or expenses in {period}. Showing general data."
        )


def _render_dashboard(
    view: DashboardView,
    snapshots: list[BucketSnapshot],
    currency_code: str,
) -> None:
    """Render the summary metrics and the wealth evolution chart."""
    summary = view.summary
    _render_period_indicator(view)
    for warning in view.warnings:
        st.warning(warning)

    income_col, expenses_col, net_col = st.columns(3)
    income_col.metric(
        "Monthly income",
        _format_currency(summary.total_monthly_income, currency_code),
    )
    expenses_col.metric(
        "Monthly expenses",
        _format_currency(summary.total_monthly_expenses, currency_code),
    )
    net_col.metric(
        "Net monthly income",
        _format_currency(summary.net_monthly_income, currency_code),
        _format_percent(summary.ratios.savings_rate),
    )

    assets_col, debt_col, worth_col = st.columns(3)
    assets_col.metric(
        "Total assets",
        _format_currency(summary.total_assets, currency_code),
    )
    debt_col.metric(
        "Total debt",
        _format_currency(summary.total_debt, currency_code),
        _format_percent(summary.ratios.debt_to_income_ratio),
        delta_color="inverse",
    )
    worth_col.metric(
        "Net worth",
        _format_currency(summary.net_worth, currency_code),
    )
    st.caption(
        f"Emergency fund: {summary.ratios.emergency_fund_months:.1f} months"
        f" | Bills: {_format_currency(summary.total_monthly_bills, currency_code)}"
        f" | Goals: {_format_currency(summary.total_goal_saved, currency_code)}"
        f" of {_format_currency(summary.total_goal_target, currency_code)}"
    )

    st.subheader("Wealth evolution")
    model = build_wealth_chart_model(snapshots)
    if model.is_empty:
        st.info("No wealth data for the selected period.")
        return
    st.plotly_chart(build_plotly_figure(model), width="stretch")


def _render_expenses(overview: ExpenseOverview, currency_code: str) -> None:
    """Render the expense listing with its breakdowns and extras."""
    total_col, extras_col, count_col = st.columns(3)
    total_col.metric(
        "Monthly expenses",
        _format_currency(overview.total, currency_code),
    )
    extras_col.metric(
        "Including extras",
        _format_currency(overview.total_with_extras, currency_code),
    )
    count_col.metric("Items", str(len(overview.items)))

    chart_left, chart_right = st.columns(2)
    with chart_left:
        _render_category_chart(
            overview.by_source,
            "Expenses by source",
            currency_code,
        )
    with chart_right:
        _render_category_chart(
            overview.by_category,
            "Expenses by category",
            currency_code,
        )

    st.dataframe(
        [
            {
                "Source": item.source,
                "Description": item.description,
                "Category": item.category,
                "Amount": float(item.amount),
                "Date": item.occurred_on.isoformat() if item.occurred_on else "",
                "Recurring": item.recurring,
            }
            for item in overview.items
        ],
        width="stretch",
        hide_index=True,
    )
    st.dataframe(
        [
            {
                "Extra": EXTRA_LABELS.get(key, key),
                "Amount": float(amount),
            }
            for key, amount in overview.extras.items()
        ],
        width="stretch",
        hide_index=True,
    )


def _render_income(overview: IncomeOverview, currency_code: str) -> None:
    """Render the income donut with gross, tax and net monthly figures."""
    _render_category_chart(
        overview.breakdown,
        "Income by category",
        currency_code,
    )
    gross_col, tax_col, net_col = st.columns(3)
    gross_col.metric(
        "Monthly income",
        _format_currency(overview.total, currency_code),
    )
    tax_col.metric(
        "Estimated tax",
        _format_currency(overview.estimated_tax, currency_code),
    )
    net_col.metric(
        "Net of tax",
        _format_currency(overview.net_total, currency_code),
    )


def _render_insights(report: InsightsReport, currency_code: str) -> None:
    """Render the insights score, insights and recommendations."""
    st.metric("Financial score", f"{report.score}/100")
    for insight in report.insights:
        text = f"**{insight.title}**\n\n{insight.description}"
        if insight.potential_savings:
            savings = _format_currency(insight.potential_savings, currency_code)
            text += f"\n\nPotential savings: {savings}"
        if insight.type == "warning":
            st.warning(text)
        elif insight.type == "achievement":
            st.success(text)
        else:
            st.info(text)
    if not report.recommendations:
        return
    st.subheader("Recommendations")
    st.dataframe(
        [
            {
                "Recommendation": item.title,
                "Priority": item.priority,
                "Difficulty": item.difficulty,
                "Monthly savings": float(item.potential_savings),
            }
            for item in report.recommendations
        ],
        width="stretch",
        hide_index=True,
    )


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Finance Dashboard", layout="wide")
    st.title("Finance Dashboard")

    settings = FinanceSettings.from_env()
    owner_id = settings.owner_id or st.sidebar.text_input("Owner ID")
    if not owner_id:
        st.warning("Set FINANCE_OWNER_ID or enter an owner ID.")
        return

    page = st.sidebar.selectbox(
        "Page",
        ["Dashboard", "Income", "Expenses", "Insights"],
    )
    today = date.today()
    start_date, end_date = _select_period(settings.default_range, today)
    get_usage_logger().info(
        f"page={page} owner={owner_id} start={start_date} end={end_date}"
    )

    gate = _request_gate()
    ticket = gate.begin((page, owner_id, start_date, end_date))
    try:
        if page == "Dashboard":
            result = (
                _load_dashboard(owner_id, start_date, end_date),
                _load_wealth_evolution(owner_id, start_date, end_date),
            )
        elif page == "Income":
            result = _load_income_breakdown(owner_id, start_date, end_date)
        elif page == "Expenses":
            result = _load_expense_overview(owner_id, start_date, end_date)
        else:
            result = _load_insights(owner_id)
    except DataStoreUnavailableError as exc:
        st.error(f"Finance data is unavailable: {exc}")
        return
    except FinanceError as exc:
        get_usage_logger().error(f"page={page} owner={owner_id} failed: {exc}")
        st.error(f"Finance data could not be computed: {exc}")
        return

    if gate.accept(ticket, result) is None:
        return

    if page == "Dashboard":
        view, snapshots = result
        _render_dashboard(view, snapshots, settings.currency)
    elif page == "Income":
        _render_income(result, settings.currency)
    elif page == "Expenses":
        _render_expenses(result, settings.currency)
    else:
        _render_insights(result, settings.currency)


if __name__ == "__main__":  # pragma: no cover
    main()
