"""Tests for the Streamlit app module."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

from src.adapters.interface.streamlit import app
from src.application.use_cases.latest_request import LatestRequestGate
from src.domain.errors import DataStoreUnavailableError, UnknownFrequencyError
from src.domain.models import (
    CategoryBreakdown,
    CategoryTotal,
    DashboardView,
    Insight,
    IncomeOverview,
    InsightsReport,
)
from src.domain.services.finance import build_dashboard_summary
from src.infrastructure.settings import FinanceSettings


def test_fetch_dashboard_invokes_use_case(monkeypatch):
    """_fetch_dashboard should build the use case and forward the period."""
    use_case = MagicMock()
    use_case.execute.return_value = "view"
    monkeypatch.setattr(app, "build_dashboard_summary_use_case", lambda: use_case)

    result = app._fetch_dashboard("owner-1", date(2024, 1, 1), date(2024, 1, 31))

    assert result == "view"
    use_case.execute.assert_called_once_with(
        "owner-1",
        start_date=date(2024, 1, 1),
        end_date=date(2024, 1, 31),
    )


def test_load_insights_uses_fetch(monkeypatch):
    """The cached loader should delegate to _fetch_insights."""
    monkeypatch.setattr(app, "_fetch_insights", lambda owner_id: f"report:{owner_id}")

    assert app._load_insights("owner-cached") == "report:owner-cached"


def test_prepare_donut_chart_data_groups_small_categories():
    breakdown = CategoryBreakdown(
        total=Decimal("100"),
        categories=[
            CategoryTotal("Housing", Decimal("60"), Decimal("60")),
            CategoryTotal("Food", Decimal("30"), Decimal("30")),
            CategoryTotal("Fun", Decimal("6"), Decimal("6")),
            CategoryTotal("Misc", Decimal("4"), Decimal("4")),
        ],
    )

    data = app._prepare_donut_chart_data(breakdown, "BRL", max_categories=2)

    assert [item["category"] for item in data] == ["Housing", "Food", "Other"]
    assert data[2]["amount"] == 10.0
    assert data[2]["share_label"] == "10.0%"
    assert data[0]["amount_label"] == "R$ 60.00"


def test_format_currency_falls_back_to_code():
    assert app._format_currency(Decimal("1234.5"), "GBP") == "GBP 1,234.50"


class _FakeColumn:
    def __init__(self, owner: "_FakeStreamlit") -> None:
        self._owner = owner

    def metric(self, label, value, *args, **kwargs):
        self._owner.metrics[label] = value

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False


class _FakeSidebar:
    def __init__(self, choices: dict[str, str], owner_input: str = "") -> None:
        self._choices = choices
        self._owner_input = owner_input
        self.warnings: list[str] = []

    def selectbox(self, label, options, index=0, format_func=None):
        return self._choices.get(label, options[index])

    def text_input(self, label):
        return self._owner_input

    def date_input(self, label, value=None):
        return self._choices.get(label, value)

    def warning(self, text: str):
        self.warnings.append(text)


class _FakeStreamlit:
    def __init__(self, sidebar: _FakeSidebar) -> None:
        self.sidebar = sidebar
        self.session_state: dict = {}
        self.metrics: dict[str, str] = {}
        self.captions: list[str] = []
        self.warnings: list[str] = []
        self.errors: list[str] = []
        self.infos: list[str] = []
        self.successes: list[str] = []
        self.charts: list = []
        self.dataframes: list = []

    def set_page_config(self, **kwargs):
        self.config_kwargs = kwargs

    def title(self, text: str):
        self.title_text = text

    def caption(self, text: str):
        self.captions.append(text)

    def warning(self, text: str):
        self.warnings.append(text)

    def error(self, text: str):
        self.errors.append(text)

    def info(self, text: str):
        self.infos.append(text)

    def success(self, text: str):
        self.successes.append(text)

    def subheader(self, text: str):
        pass

    def metric(self, label, value, *args, **kwargs):
        self.metrics[label] = value

    def columns(self, count: int):
        return [_FakeColumn(self) for _ in range(count)]

    def plotly_chart(self, figure, **kwargs):
        self.charts.append(figure)

    def dataframe(self, data, **kwargs):
        self.dataframes.append((data, kwargs))


def _use_settings(monkeypatch, **kwargs) -> None:
    monkeypatch.setattr(
        app.FinanceSettings,
        "from_env",
        classmethod(lambda cls: FinanceSettings(**kwargs)),
    )


def _dashboard_view() -> DashboardView:
    summary = build_dashboard_summary(today=date(2024, 1, 1), logger=MagicMock())
    return DashboardView(
        summary=summary,
        date_filter_applied=False,
        start_date=date(2024, 1, 1),
        end_date=date(2024, 1, 31),
    )


def test_main_requires_owner(monkeypatch):
    """main should stop when no owner is configured or entered."""
    fake_st = _FakeStreamlit(_FakeSidebar({}))
    monkeypatch.setattr(app, "st", fake_st)
    _use_settings(monkeypatch)

    app.main()

    assert fake_st.warnings == ["Set FINANCE_OWNER_ID or enter an owner ID."]
    assert fake_st.metrics == {}


def test_main_renders_dashboard(monkeypatch):
    """main should render the summary metrics for the selected period."""
    fake_st = _FakeStreamlit(
        _FakeSidebar({"Page": "Dashboard", "Period": "thisMonth"})
    )
    captured = {}

    def fake_load_dashboard(owner_id, start_date, end_date):
        captured["args"] = (owner_id, start_date, end_date)
        return _dashboard_view()

    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "get_usage_logger", lambda: MagicMock())
    monkeypatch.setattr(app, "_load_dashboard", fake_load_dashboard)
    monkeypatch.setattr(app, "_load_wealth_evolution", lambda *args: [])
    _use_settings(monkeypatch, owner_id="owner-1")

    app.main()

    owner_id, start_date, end_date = captured["args"]
    assert owner_id == "owner-1"
    assert start_date.day == 1
    assert end_date == date.today()
    assert fake_st.metrics["Net worth"] == "R$ 0.00"
    assert fake_st.captions[0] == (
        "No income or expenses in 01/01/2024 - 31/01/2024. "
        "Showing general data."
    )
    assert fake_st.infos == ["No wealth data for the selected period."]


def test_main_renders_insights(monkeypatch):
    fake_st = _FakeStreamlit(
        _FakeSidebar({"Page": "Insights"}, owner_input="owner-2")
    )
    report = InsightsReport(
        insights=[
            Insight(
                key="warning-overdue-bills",
                type="warning",
                title="1 overdue bill(s)",
                description="Pay it.",
                impact="high",
                action_path="bills",
                action_label="Pay bills",
            )
        ],
        recommendations=[],
        score=80,
    )
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "get_usage_logger", lambda: MagicMock())
    monkeypatch.setattr(app, "_load_insights", lambda owner_id: report)
    _use_settings(monkeypatch)

    app.main()

    assert fake_st.metrics["Financial score"] == "80/100"
    assert fake_st.warnings == ["**1 overdue bill(s)**\n\nPay it."]


def test_main_reports_unavailable_data_store(monkeypatch):
    fake_st = _FakeStreamlit(_FakeSidebar({"Page": "Insights"}))

    def failing_load(owner_id):
        raise DataStoreUnavailableError({"bills": "timeout"})

    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "get_usage_logger", lambda: MagicMock())
    monkeypatch.setattr(app, "_load_insights", failing_load)
    _use_settings(monkeypatch, owner_id="owner-1")

    app.main()

    assert len(fake_st.errors) == 1
    assert "bills" in fake_st.errors[0]


def test_main_discards_superseded_result(monkeypatch):
    """A result whose request was superseded should not be rendered."""

    class _StaleGate(LatestRequestGate):
        def accept(self, ticket, result):
            return None

    fake_st = _FakeStreamlit(_FakeSidebar({"Page": "Insights"}))
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "get_usage_logger", lambda: MagicMock())
    monkeypatch.setattr(app, "_request_gate", lambda: _StaleGate())
    monkeypatch.setattr(
        app,
        "_load_insights",
        lambda owner_id: InsightsReport(insights=[], recommendations=[], score=75),
    )
    _use_settings(monkeypatch, owner_id="owner-1")

    app.main()

    assert fake_st.metrics == {}


def test_select_period_custom_range_warns_when_inverted(monkeypatch):
    sidebar = _FakeSidebar(
        {
            "Period": app.CUSTOM_RANGE,
            "Start": date(2024, 3, 1),
            "End": date(2024, 2, 1),
        }
    )
    monkeypatch.setattr(app, "st", _FakeStreamlit(sidebar))

    start_date, end_date = app._select_period("30days", date(2024, 3, 10))

    assert (start_date, end_date) == (date(2024, 3, 1), date(2024, 2, 1))
    assert sidebar.warnings == ["Start date is after end date."]


def test_request_gate_is_kept_in_session(monkeypatch):
    fake_st = _FakeStreamlit(_FakeSidebar({}))
    monkeypatch.setattr(app, "st", fake_st)

    assert app._request_gate() is app._request_gate()


def test_main_renders_income_with_estimated_tax(monkeypatch):
    fake_st = _FakeStreamlit(_FakeSidebar({"Page": "Income", "Period": "30days"}))
    overview = IncomeOverview(
        breakdown=CategoryBreakdown(
            total=Decimal("5000"),
            categories=[CategoryTotal("Salary", Decimal("5000"), Decimal("100"))],
        ),
        estimated_tax=Decimal("1375"),
    )
    charted = []
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "get_usage_logger", lambda: MagicMock())
    monkeypatch.setattr(app, "_load_income_breakdown", lambda *args: overview)
    monkeypatch.setattr(
        app,
        "_render_category_chart",
        lambda breakdown, title, currency_code: charted.append(breakdown),
    )
    _use_settings(monkeypatch, owner_id="owner-1")

    app.main()

    assert charted == [overview.breakdown]
    assert fake_st.metrics["Monthly income"] == "R$ 5,000.00"
    assert fake_st.metrics["Estimated tax"] == "R$ 1,375.00"
    assert fake_st.metrics["Net of tax"] == "R$ 3,625.00"


def test_main_reports_finance_errors(monkeypatch):
    """A malformed record in strict mode should show an error, not a traceback."""
    fake_st = _FakeStreamlit(_FakeSidebar({"Page": "Insights"}))

    def failing_load(owner_id):
        raise UnknownFrequencyError("fortnightly")

    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "get_usage_logger", lambda: MagicMock())
    monkeypatch.setattr(app, "_load_insights", failing_load)
    _use_settings(monkeypatch, owner_id="owner-1")

    app.main()

    assert len(fake_st.errors) == 1
    assert "fortnightly" in fake_st.errors[0]
    assert fake_st.metrics == {}


def test_main_drops_result_of_run_overtaken_by_rerun(monkeypatch):
    """A rerun started while a load is in flight wins over the older run."""
    fake_st = _FakeStreamlit(_FakeSidebar({"Page": "Insights"}))
    runs = []

    def load_insights(owner_id):
        runs.append(owner_id)
        score = len(runs) * 10
        if score == 10:
            app.main()
        return InsightsReport(insights=[], recommendations=[], score=score)

    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "get_usage_logger", lambda: MagicMock())
    monkeypatch.setattr(app, "_load_insights", load_insights)
    _use_settings(monkeypatch, owner_id="owner-1")

    app.main()

    assert len(runs) == 2
    assert fake_st.metrics["Financial score"] == "20/100"
