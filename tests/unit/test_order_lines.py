"""Unit tests for order line models, QuoteStore, pricing and JSON persistence."""

import json

import pytest

from rbq.quote import CalculationService, OrderLine, QuoteStore
from rbq.quote.models import next_in_cycle
from rbq.quote.persistence import ITEMS_KEY, load_rows, rows_from_payload, save_rows


class TestCycles:

    @pytest.mark.parametrize('column,current,expected', [
        ('over', '', 'O'),
        ('over', 'O', ''),
        ('oi', '', 'IN'),
        ('oi', 'IN', 'OUT'),
        ('oi', 'OUT', 'IN'),
        ('lr', None, 'L'),
        ('lr', 'L', 'R'),
        ('lr', 'R', 'L'),
        ('lr', 'X', 'L'),
    ])
    def test_next_in_cycle(self, column, current, expected):
        assert next_in_cycle(column, current) == expected

    def test_unknown_column_raises(self):
        with pytest.raises(KeyError):
            next_in_cycle('dual', '')


class TestOrderLine:

    def test_placeholder_is_empty(self):
        assert OrderLine.empty(4).is_empty
        assert not OrderLine(1, width=1000, height=1200, fabric_type='BO').is_empty

    def test_serialized_name_for_fabric_type(self):
        data = OrderLine(1, width=1000, fabric_type='SN').to_dict()
        assert data['fabricType'] == 'SN'
        assert 'fabric_type' not in data

    def test_from_dict_ignores_unknown_keys(self):
        line = OrderLine.from_dict({'fabricType': 'BO1', 'width': 900, 'price': 12}, sequence=3)
        assert line == OrderLine(3, width=900, fabric_type='BO1')


class TestQuoteStore:

    def test_empty_collection_gets_placeholder(self):
        store = QuoteStore([])
        assert store.row_count == 1
        assert store.get_row(0).is_empty
        assert not store.has_data()

    def test_has_data(self, quote_store):
        assert quote_store.has_data()

    def test_rows_snapshot_is_stable(self, quote_store):
        before = quote_store.get_rows()
        quote_store.update_field(0, 'location', 'Hall')
        assert before[0].location == 'Kitchen'
        assert quote_store.get_row(0).location == 'Hall'

    def test_update_unknown_field_raises(self, quote_store):
        with pytest.raises(KeyError):
            quote_store.update_field(0, 'sequence', 9)

    def test_update_out_of_range_raises(self, quote_store):
        with pytest.raises(IndexError):
            quote_store.update_field(10, 'location', 'Hall')

    def test_batch_update_by_type(self, quote_store):
        assert quote_store.batch_update_by_type('BO1', 'color', 'Sand') == 2
        assert [row.color for row in quote_store.get_rows()] == ['White', 'Sand', 'Grey', 'Sand', None]

    def test_batch_update_column(self, quote_store):
        quote_store.batch_update_column('over', 'O')
        assert all(row.over == 'O' for row in quote_store.get_rows())

    def test_apply_and_clear_lf(self, quote_store):
        quote_store.batch_apply_lf([1, 3], 'Sheer', 'Ivory')
        assert quote_store.get_row(3).fabric == 'Sheer'

        quote_store.clear_lf([3])
        assert (quote_store.get_row(3).fabric, quote_store.get_row(3).color) == ('', '')
        assert quote_store.get_row(1).color == 'Ivory'

    def test_cycle_field(self, quote_store):
        assert quote_store.cycle_field(2, 'oi') == 'IN'
        assert quote_store.get_row(2).oi == 'IN'

    def test_cycle_non_cycle_column_raises(self, quote_store):
        with pytest.raises(ValueError):
            quote_store.cycle_field(0, 'location')


class TestCalculationService:

    @pytest.mark.parametrize('marked,expected', [(0, 0.0), (1, 0.0), (2, 10.0), (3, 10.0), (6, 30.0)])
    def test_pairs_are_priced(self, marked, expected):
        rows = [OrderLine(i + 1, dual='D' if i < marked else '') for i in range(6)]
        assert CalculationService().price_for_dual_brackets(rows) == expected

    def test_configurable_pair_price(self):
        rows = [OrderLine(1, dual='D'), OrderLine(2, dual='D')]
        assert CalculationService(dual_bracket_pair_price=12.5).price_for_dual_brackets(rows) == 12.5


class TestPersistence:

    def test_save_and_load(self, tmp_path, order_lines):
        path = tmp_path / 'nested' / 'quote.json'
        save_rows(path, order_lines)

        payload = json.loads(path.read_text(encoding='utf-8'))
        assert len(payload[ITEMS_KEY]) == 5
        assert load_rows(path) == order_lines

    def test_bare_list_renumbers_sequence(self):
        rows = rows_from_payload([{'sequence': 7, 'width': 100}, {'sequence': 2, 'width': 200}])
        assert [row.sequence for row in rows] == [1, 2]

    def test_missing_items_raises(self):
        with pytest.raises(ValueError):
            rows_from_payload({'items': []})
