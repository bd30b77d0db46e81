from types import SimpleNamespace
from unittest.mock import MagicMock

import pandas as pd
import pytest
from pydantic import ValidationError

from findash.config import Settings
from findash.domain.categories import MetricCategory, RowCategory
from findash.sync.rendering import Rect
from findash.sync.view_state import LoadState, MetricSlot, TableSlot, ViewState, format_amount
from findash.ui import state as ui_state
from findash.ui.streamlit_renderer import Region, StreamlitRenderer, TableBody
from findash.ui.validation import validate_backend_connection, validate_settings


def _renderer():
    def region(name, top):
        return Region(name=name, rect=Rect(top, 0.0, 100.0, 50.0), body=MagicMock(), overlay=MagicMock())

    layout = SimpleNamespace(
        metrics={c: region(c.value, i * 50.0) for i, c in enumerate(MetricCategory)},
        tables={c: region(c.value, 200.0 + i * 50.0) for i, c in enumerate(RowCategory)},
    )
    layout.regions = lambda: [*layout.metrics.values(), *layout.tables.values()]
    return StreamlitRenderer(layout), layout


def test_format_amount():
    assert format_amount(1234567.891) == "$1,234,567.89"
    assert format_amount(-5) == "-$5.00"


def test_metric_slot_display():
    assert MetricSlot(MetricCategory.GAINS, value=10.0).display == "$10.00"
    assert MetricSlot(MetricCategory.GAINS, error="boom").display == "unavailable"


def test_view_state_starts_empty():
    view = ViewState()
    assert view.metrics is None
    for category in RowCategory:
        slot = view.slot(category)
        assert slot == TableSlot(category=category)
        assert slot.state is LoadState.EMPTY
        assert slot.container is None


def test_settings_reject_default_rows_above_page_size():
    with pytest.raises(ValidationError):
        Settings(PAGE_SIZE=50, DEFAULT_ROWS=80)


def test_settings_read_prefixed_environment(monkeypatch):
    monkeypatch.setenv("FINDASH_MAX_ROWS", "42")
    assert Settings().MAX_ROWS == 42


def test_streamlit_attach_redraws_mounted_table_once():
    renderer, layout = _renderer()
    body = renderer.create_container(RowCategory.USERS)
    renderer.mount(RowCategory.USERS, body)
    placeholder = layout.tables[RowCategory.USERS].body
    placeholder.dataframe.reset_mock()

    batch = renderer.build_batch(RowCategory.USERS, [{"id": 1}, {"id": 2}, {"id": 3}])
    renderer.attach_batch(body, batch)

    assert len(body) == 3
    assert placeholder.dataframe.call_count == 1


def test_streamlit_attach_off_view_draws_nothing():
    renderer, layout = _renderer()
    body = TableBody(RowCategory.OPERATIONS)
    renderer.attach_batch(body, pd.DataFrame([{"id": 1}]))
    renderer.attach_batch(body, pd.DataFrame([{"id": 2}]))
    assert list(body.frame["id"]) == [1, 2]
    layout.tables[RowCategory.OPERATIONS].body.dataframe.assert_not_called()


def test_streamlit_overlay_targets_region_placeholder():
    renderer, layout = _renderer()
    region = renderer.metric_region(MetricCategory.DIVIDENDS)
    element = renderer.create_overlay(renderer.get_bounding_rect(region))
    assert element is region.overlay
    renderer.detach(element)
    region.overlay.empty.assert_called_once()


def test_streamlit_overlay_tolerates_scroll_round_trip():
    renderer, _ = _renderer()
    region = renderer.table_region(RowCategory.USERS)
    rect = region.rect.shifted(0.1, -0.3).shifted(-0.1, 0.3)
    element = renderer.create_overlay(rect)
    assert element is region.overlay


def test_streamlit_overlay_outside_every_region():
    renderer, _ = _renderer()
    with pytest.raises(LookupError):
        renderer.create_overlay(Rect(5000.0, 5000.0, 10.0, 10.0))


def test_api_url_is_kept_in_session(monkeypatch):
    monkeypatch.setattr(ui_state, "st", SimpleNamespace(session_state={}))
    ui_state.init_session()
    assert ui_state.get_api_url() == ui_state.settings.API_URL

    ui_state.set_api_url("http://10.0.0.5:8000")
    assert ui_state.get_api_url() == "http://10.0.0.5:8000"
    assert ui_state.get_view_state().metrics is None


def test_validation():
    errors = validate_settings()
    assert isinstance(errors, list)

    # Backend connection will fail in test (no server), but should not crash
    errors = validate_backend_connection("http://127.0.0.1:9")
    assert isinstance(errors, list)
    assert len(errors) > 0
