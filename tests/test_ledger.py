"""Tests for the blade inventory ledger and shopping list."""

import pytest

from clearview.core.enums import BladePosition, JobStatus
from clearview.models.job import BladeLineItem, Job
from clearview.services.ledger import (
    InventoryLedger,
    blades_needed,
    shopping_list,
    size_sort_key,
)


def _blades(*sizes):
    return [BladeLineItem(size=s, position=BladePosition.DRIVER) for s in sizes]


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestLedgerDocument:
    def test_from_document(self):
        ledger = InventoryLedger.from_document({"counts": {'26"': 3, '18"': "2"}})
        assert ledger.quantity('26"') == 3
        assert ledger.quantity('18"') == 2

    def test_missing_document_is_empty(self):
        assert InventoryLedger.from_document(None).total_blades() == 0
        assert InventoryLedger.from_document({}).as_dict() == {}

    def test_negative_counts_clamped(self):
        assert InventoryLedger({'26"': -4}).quantity('26"') == 0

    def test_round_trip_document(self):
        ledger = InventoryLedger({'26"': 3})
        assert InventoryLedger.from_document(ledger.to_document()) == ledger

    def test_sizes_sorted_by_inches(self):
        ledger = InventoryLedger({'26"': 1, '12"': 1, '9"': 1, '18"': 1})
        assert ledger.sorted_sizes() == ['9"', '12"', '18"', '26"']
        assert size_sort_key("odd") > size_sort_key('28"')


# ---------------------------------------------------------------------------
# Fulfillment
# ---------------------------------------------------------------------------


class TestCanFulfill:
    def test_all_in_stock(self):
        ledger = InventoryLedger({'26"': 1, '18"': 1})
        assert ledger.can_fulfill(_blades('26"', '18"'))

    def test_zero_stock(self):
        ledger = InventoryLedger({'26"': 1, '18"': 0})
        assert not ledger.can_fulfill(_blades('26"', '18"'))
        assert ledger.missing_sizes(_blades('26"', '18"')) == ['18"']

    def test_unknown_size(self):
        assert not InventoryLedger({}).can_fulfill(_blades('22"'))

    def test_same_size_twice_checks_each_item_alone(self):
        """One unit on hand is enough for two blades of that size."""
        ledger = InventoryLedger({'22"': 1})
        assert ledger.can_fulfill(_blades('22"', '22"'))

    def test_no_blades(self):
        assert InventoryLedger({}).can_fulfill([])


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------


class TestMutations:
    def test_decrement_for_job(self):
        ledger = InventoryLedger({'26"': 3, '18"': 1})
        after = ledger.decrement_for_job(_blades('26"', '18"'))
        assert after.as_dict() == {'26"': 2, '18"': 0}

    def test_decrement_leaves_original_untouched(self):
        ledger = InventoryLedger({'26"': 3})
        ledger.decrement_for_job(_blades('26"'))
        assert ledger.quantity('26"') == 3

    @pytest.mark.parametrize("start", [0, 1, 2, 5])
    def test_decrement_never_negative(self, start):
        ledger = InventoryLedger({'22"': start})
        after = ledger.decrement_for_job(_blades('22"', '22"', '22"'))
        assert after.quantity('22"') >= 0
        assert after.quantity('22"') == max(0, start - 3)

    def test_decrement_unknown_size_is_ignored(self):
        after = InventoryLedger({}).decrement_for_job(_blades('22"'))
        assert after.quantity('22"') == 0

    def test_adjust_floors_at_zero(self):
        ledger = InventoryLedger({'26"': 1})
        assert ledger.adjust('26"', -5).quantity('26"') == 0
        assert ledger.adjust('26"', 4).quantity('26"') == 5

    def test_adjust_new_size(self):
        assert InventoryLedger({}).adjust('13"', 2).quantity('13"') == 2

    def test_set_quantity(self):
        ledger = InventoryLedger({'26"': 1})
        assert ledger.set_quantity('26"', "12").quantity('26"') == 12
        assert ledger.set_quantity('26"', 0).quantity('26"') == 0

    @pytest.mark.parametrize("value", ["abc", "-1", -1, "1.5", None, True, ""])
    def test_set_quantity_rejects_invalid(self, value):
        ledger = InventoryLedger({'26"': 4})
        assert ledger.set_quantity('26"', value) is ledger

    def test_low_stock(self):
        ledger = InventoryLedger({'26"': 10, '18"': 2, '12"': 0})
        assert ledger.low_stock() == ['12"', '18"']

    def test_with_unit_costs(self):
        view = InventoryLedger({'26"': 2}).with_unit_costs(7.0, {'18"': 9.0})
        assert view['26"'].qty == 2
        assert view['26"'].unit_cost == 7.0
        assert '18"' not in view


# ---------------------------------------------------------------------------
# Shopping List
# ---------------------------------------------------------------------------


class TestShoppingList:
    def _job(self, status, *sizes):
        return Job(customer_id="c1", status=status, blades=_blades(*sizes))

    def test_counts_open_jobs_only(self):
        jobs = [
            self._job(JobStatus.PENDING, '26"', '18"'),
            self._job(JobStatus.SCHEDULED, '26"'),
            self._job(JobStatus.COMPLETED, '26"', '12"'),
        ]
        assert blades_needed(jobs) == {'26"': 2, '18"': 1}

    def test_only_short_sizes(self):
        ledger = InventoryLedger({'26"': 1, '18"': 5})
        assert shopping_list({'26"': 3, '18"': 2, '12"': 1}, ledger) == {'12"': 1, '26"': 2}

    def test_all_in_stock(self):
        assert shopping_list({'26"': 1}, InventoryLedger({'26"': 1})) == {}
