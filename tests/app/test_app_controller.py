"""Tests for AppController view, tab and document handling."""

import pytest

from rbq.app import AppController
from rbq.detail.columns import QUICK_QUOTE_COLUMNS, columns_for_tab
from rbq.detail.state import EditMode, UiStateStore, View
from rbq.quote import OrderLine


@pytest.fixture
def ui_store():
    """Fresh state: the quick list is showing."""
    return UiStateStore()


@pytest.fixture
def app(orchestrator):
    return AppController(orchestrator)


class TestNavigation:

    def test_enter_detail_view(self, app, recorder):
        assert app.navigate_to_detail_view() is True

        state = app.ui.state
        assert state.current_view == View.DETAIL_CONFIG
        assert state.active_tab_id == 'k1-tab'
        assert state.visible_columns == columns_for_tab('k1-tab')
        assert len(state.panel_inputs) == 8
        assert recorder.publish_count == 1

    def test_detail_toggle_returns_to_quick_list(self, app):
        app.navigate_to_detail_view()
        app.navigate_to_detail_view()

        state = app.ui.state
        assert state.current_view == View.QUICK_QUOTE
        assert state.visible_columns == QUICK_QUOTE_COLUMNS

    def test_navigation_drops_open_mode(self, app, orchestrator):
        app.navigate_to_detail_view()
        orchestrator.toggle_k3_edit_mode()
        app.navigate_to_quick_quote()

        assert app.ui.state.active_edit_mode == EditMode.NONE

    def test_lf_marking_survives_navigation(self, app):
        app.navigate_to_detail_view()
        app.ui.update(lf_modified_row_indexes=frozenset({1}))
        app.navigate_to_quick_quote()
        app.navigate_to_detail_view()

        assert app.ui.state.lf_modified_row_indexes == frozenset({1})


class TestTabs:

    def test_switch_tab(self, app, recorder):
        app.navigate_to_detail_view()
        assert app.switch_tab('k4-tab') is True
        assert app.ui.state.visible_columns == columns_for_tab('k4-tab')
        assert recorder.publish_count == 2

    def test_unknown_tab(self, app):
        assert app.switch_tab('k9-tab') is False

    def test_rejected_in_edit_mode(self, app, orchestrator):
        app.navigate_to_detail_view()
        orchestrator.k4_mode_changed('dual')

        assert app.switch_tab('k3-tab') is False
        assert app.ui.state.active_tab_id == 'k1-tab'


class TestDocument:

    def test_load_replaces_rows_and_state(self, app, orchestrator, recorder):
        app.navigate_to_detail_view()
        orchestrator.toggle_k3_edit_mode()

        rows = [OrderLine(1, width=600, height=900, fabric_type='SN'), OrderLine.empty(2)]
        assert app.load_document(rows, source='quote.json') is True

        assert app.quotes.get_rows() == tuple(rows)
        assert app.ui.state.active_edit_mode == EditMode.NONE
        assert app.ui.state.current_view == View.QUICK_QUOTE
        assert recorder.infos[-1] == 'Loaded 2 item(s) from quote.json.'

    def test_load_clears_lf_marking(self, app):
        app.ui.update(lf_modified_row_indexes=frozenset({1}))
        app.load_document([OrderLine.empty(1)])
        assert app.ui.state.lf_modified_row_indexes == frozenset()

    def test_reset_leaves_placeholder(self, app):
        assert app.has_data()
        app.reset_document()

        assert app.quotes.row_count == 1
        assert not app.has_data()
