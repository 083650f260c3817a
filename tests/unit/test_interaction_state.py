"""Unit tests for InteractionState invariants and UiStateStore transitions."""

import pytest

from rbq.detail.columns import QUICK_QUOTE_COLUMNS, columns_for_tab
from rbq.detail.state import (
    CellRef,
    EditMode,
    InteractionState,
    K4Mode,
    PanelInput,
    UiStateStore,
    View,
)


class TestInteractionStateDefaults:

    def test_defaults(self):
        state = InteractionState()
        assert state.current_view == View.QUICK_QUOTE
        assert state.active_tab_id == 'k1-tab'
        assert state.visible_columns == QUICK_QUOTE_COLUMNS
        assert state.active_edit_mode == EditMode.NONE
        assert state.k4_active_mode == K4Mode.NONE
        assert not state.is_in_edit_mode

    def test_k4_counts_as_edit_mode(self):
        assert InteractionState(k4_active_mode=K4Mode.DUAL).is_in_edit_mode

    def test_lf_submode_flag(self):
        assert EditMode.K2_LF_SELECT.is_lf_submode
        assert EditMode.K2_LF_DELETE_SELECT.is_lf_submode
        assert not EditMode.K2.is_lf_submode


class TestInteractionStateInvariants:

    def test_target_requires_location_or_chain(self):
        with pytest.raises(ValueError):
            InteractionState(target_cell=CellRef(0, 'location'))
        with pytest.raises(ValueError):
            InteractionState(active_edit_mode=EditMode.K3, target_cell=CellRef(0, 'over'))

    def test_target_allowed_in_location_mode(self):
        state = InteractionState(active_edit_mode=EditMode.K1, target_cell=CellRef(0, 'location'))
        assert state.target_cell.row_index == 0

    def test_target_allowed_in_chain_mode(self):
        state = InteractionState(k4_active_mode=K4Mode.CHAIN, target_cell=CellRef(2, 'chain'))
        assert state.target_cell.column == 'chain'

    def test_lf_selection_requires_submode(self):
        with pytest.raises(ValueError):
            InteractionState(active_edit_mode=EditMode.K2, lf_selected_row_indexes=frozenset({1}))

    def test_panel_lookup(self):
        state = InteractionState(panel_inputs=(
            PanelInput('BO', 'fabric', True, 'Classic'),
            PanelInput('BO', 'color', False, ''),
        ))
        assert state.panel_input('BO', 'fabric').value == 'Classic'
        assert state.panel_input('SN', 'fabric') is None
        assert state.enabled_panel_keys() == (('BO', 'fabric'),)


class TestUiStateStore:

    def test_update_replaces_state(self):
        store = UiStateStore()
        before = store.state
        after = store.update(active_tab_id='k3-tab')

        assert before.active_tab_id == 'k1-tab'
        assert after is store.state
        assert after.active_tab_id == 'k3-tab'

    def test_invalid_update_keeps_old_state(self):
        store = UiStateStore()
        with pytest.raises(ValueError):
            store.update(target_cell=CellRef(0, 'location'))
        assert store.state.target_cell is None

    def test_leaving_lf_submode_drops_selection(self):
        store = UiStateStore(InteractionState(
            active_edit_mode=EditMode.K2_LF_SELECT,
            lf_selected_row_indexes=frozenset({1, 3}),
        ))
        state = store.set_active_edit_mode(EditMode.NONE)

        assert state.active_edit_mode == EditMode.NONE
        assert state.lf_selected_row_indexes == frozenset()

    def test_tab_columns_follow_active_tab(self):
        store = UiStateStore(InteractionState(active_tab_id='k4-tab'))
        assert store.tab_columns() == columns_for_tab('k4-tab')

    def test_unknown_tab_falls_back_to_default(self):
        assert columns_for_tab('k9-tab') == columns_for_tab('k1-tab')

    def test_reset_seeds_fields(self):
        store = UiStateStore(InteractionState(k4_active_mode=K4Mode.DUAL, k4_dual_price=10.0))
        state = store.reset(current_view=View.DETAIL_CONFIG)

        assert state.current_view == View.DETAIL_CONFIG
        assert state.k4_active_mode == K4Mode.NONE
        assert state.k4_dual_price is None
