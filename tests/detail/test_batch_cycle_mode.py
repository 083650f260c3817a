"""Tests for batch-cycle editing (K3) of the over/oi/lr columns."""

from rbq.detail.state import CellRef, EditMode


class TestBatchCycleToggle:

    def test_toggle_on_and_off(self, orchestrator, recorder):
        assert orchestrator.toggle_k3_edit_mode() is True
        assert orchestrator.ui.state.active_edit_mode == EditMode.K3

        assert orchestrator.toggle_k3_edit_mode() is True
        assert orchestrator.ui.state.active_edit_mode == EditMode.NONE
        assert recorder.publish_count == 2

    def test_rejected_while_fabric_mode_active(self, orchestrator):
        orchestrator.request_focus_mode('fabric')
        assert orchestrator.toggle_k3_edit_mode() is False
        assert orchestrator.ui.state.active_edit_mode == EditMode.K2


class TestColumnCycle:
    """Whole-column cycling driven by row 0's value."""

    def test_over_alternates_for_all_rows(self, orchestrator, quote_store):
        orchestrator.toggle_k3_edit_mode()

        orchestrator.request_batch_cycle('over')
        assert {row.over for row in quote_store.get_rows()} == {'O'}

        orchestrator.request_batch_cycle('over')
        assert {row.over for row in quote_store.get_rows()} == {''}

    def test_unset_value_starts_at_first_entry(self, orchestrator, quote_store):
        """A blank oi is outside the IN/OUT ring, so IN comes next."""
        orchestrator.toggle_k3_edit_mode()
        orchestrator.request_batch_cycle('oi')
        assert {row.oi for row in quote_store.get_rows()} == {'IN'}

        orchestrator.request_batch_cycle('oi')
        assert {row.oi for row in quote_store.get_rows()} == {'OUT'}

    def test_row_zero_decides_for_mixed_column(self, orchestrator, quote_store):
        quote_store.update_field(0, 'lr', 'R')
        quote_store.update_field(2, 'lr', 'L')
        orchestrator.toggle_k3_edit_mode()
        orchestrator.request_batch_cycle('lr')

        assert {row.lr for row in quote_store.get_rows()} == {'L'}

    def test_requires_batch_cycle_mode(self, orchestrator, quote_store, recorder):
        assert orchestrator.request_batch_cycle('over') is False
        assert quote_store.get_row(0).over == ''
        assert recorder.publish_count == 0

    def test_unsupported_column_is_ignored(self, orchestrator, recorder):
        orchestrator.toggle_k3_edit_mode()
        assert orchestrator.request_batch_cycle('location') is False
        assert recorder.publish_count == 1


class TestCellCycle:
    """Single-cell cycling and the transient active-cell highlight."""

    def test_click_cycles_one_cell(self, orchestrator, quote_store):
        orchestrator.toggle_k3_edit_mode()
        assert orchestrator.cell_clicked(1, 'oi') is True

        assert quote_store.get_row(1).oi == 'IN'
        assert quote_store.get_row(0).oi == ''
        assert orchestrator.ui.state.active_cell == CellRef(1, 'oi')

    def test_highlight_cleared_after_delay(self, orchestrator, recorder, scheduler):
        orchestrator.toggle_k3_edit_mode()
        orchestrator.cell_clicked(1, 'oi')
        assert recorder.publish_count == 2

        scheduler.advance(149)
        assert orchestrator.ui.state.active_cell == CellRef(1, 'oi')

        scheduler.advance(1)
        assert orchestrator.ui.state.active_cell is None
        assert recorder.publish_count == 3

    def test_newer_click_keeps_its_highlight(self, orchestrator, scheduler):
        """The first clear is skipped once another cell became active."""
        orchestrator.toggle_k3_edit_mode()
        orchestrator.cell_clicked(1, 'oi')
        scheduler.advance(100)
        orchestrator.cell_clicked(2, 'lr')

        scheduler.advance(50)
        assert orchestrator.ui.state.active_cell == CellRef(2, 'lr')

        scheduler.advance(100)
        assert orchestrator.ui.state.active_cell is None

    def test_clear_skipped_after_leaving_mode(self, orchestrator, recorder, scheduler):
        orchestrator.toggle_k3_edit_mode()
        orchestrator.cell_clicked(0, 'over')
        orchestrator.toggle_k3_edit_mode()
        published = recorder.publish_count

        assert scheduler.advance(150) == 1
        assert recorder.publish_count == published
        assert orchestrator.ui.state.active_edit_mode == EditMode.NONE

    def test_non_cycle_column_is_not_routed(self, orchestrator, quote_store):
        orchestrator.toggle_k3_edit_mode()
        assert orchestrator.cell_clicked(0, 'location') is False
        assert quote_store.get_row(0).location == 'Kitchen'

    def test_click_without_mode_does_nothing(self, orchestrator, quote_store, scheduler):
        assert orchestrator.cell_clicked(0, 'over') is False
        assert quote_store.get_row(0).over == ''
        assert scheduler.pending == 0
