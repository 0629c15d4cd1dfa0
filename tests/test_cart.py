from __future__ import annotations

import random
from decimal import Decimal

import pytest

from scoops.cart import CartLine, CartSnapshot, CartStore, badge_label, format_summary
from scoops.catalog import Catalog, FlavorItem


class TestCartStore:
    def test_adding_same_item_grows_one_line(self, cart, vanilla):
        for _ in range(4):
            cart.add(vanilla)

        snap = cart.snapshot()
        assert len(snap.lines) == 1
        assert snap.lines[0].quantity == 4
        assert snap.item_count == 4

    def test_totals_for_two_vanilla(self, cart, vanilla):
        cart.add(vanilla)
        cart.add(vanilla)

        snap = cart.snapshot()
        assert snap.subtotal == Decimal("9.98")
        assert snap.tax == Decimal("0.80")
        assert snap.total == Decimal("10.78")

    def test_lines_keep_insertion_order(self, cart, vanilla, chocolate):
        cart.add(chocolate)
        cart.add(vanilla)
        cart.add(chocolate)

        assert cart.snapshot().item_ids == (2, 1)

    def test_set_quantity_zero_equals_remove(self, catalog, vanilla, chocolate):
        a, b = CartStore(), CartStore()
        for store in (a, b):
            store.add(vanilla)
            store.add(chocolate)
            store.add(chocolate)

        a.set_quantity(chocolate.id, 0)
        b.remove(chocolate.id)

        assert a.snapshot() == b.snapshot()
        assert a.snapshot().item_ids == (vanilla.id,)

    def test_set_quantity_replaces(self, cart, vanilla):
        cart.add(vanilla)
        cart.set_quantity(vanilla.id, 5)

        assert cart.snapshot().quantity_of(vanilla.id) == 5
        assert cart.snapshot().subtotal == Decimal("24.95")

    def test_set_quantity_unknown_id_still_notifies(self, cart, vanilla):
        seen = []
        cart.add(vanilla)
        cart.subscribe(seen.append)

        cart.set_quantity(99, 3)

        assert len(seen) == 1
        assert seen[0].item_ids == (vanilla.id,)

    def test_remove_missing_still_notifies(self, cart):
        seen = []
        cart.subscribe(seen.append)

        cart.remove(42)

        assert len(seen) == 1
        assert seen[0].is_empty

    def test_clear_zeroes_everything(self, cart, vanilla, chocolate):
        cart.add(vanilla)
        cart.add(chocolate)

        cart.clear()

        snap = cart.snapshot()
        assert snap.is_empty
        assert snap.item_count == 0
        assert snap.subtotal == snap.tax == snap.total == Decimal("0")
        assert not cart
        assert len(cart) == 0

    def test_listeners_get_full_snapshots_in_order(self, cart, vanilla):
        calls = []
        cart.subscribe(lambda s: calls.append(("first", s.item_count)))
        cart.subscribe(lambda s: calls.append(("second", s.item_count)))

        cart.add(vanilla)
        cart.add(vanilla)

        assert calls == [("first", 1), ("second", 1), ("first", 2), ("second", 2)]

    def test_listener_sees_published_state(self, cart, vanilla):
        observed = []
        cart.subscribe(lambda s: observed.append(cart.snapshot() is s))

        cart.add(vanilla)

        assert observed == [True]

    def test_unsubscribe(self, cart, vanilla):
        seen = []
        cart.subscribe(seen.append)
        cart.add(vanilla)
        cart.unsubscribe(seen.append)
        cart.add(vanilla)

        assert len(seen) == 1

    def test_unsubscribe_unknown_is_ignored(self, cart):
        cart.unsubscribe(print)

    @pytest.mark.parametrize("seed", [1, 2, 3])
    def test_aggregates_match_lines_after_random_mutations(self, catalog: Catalog, seed):
        rng = random.Random(seed)
        store = CartStore()
        for _ in range(200):
            item = rng.choice(catalog.flavors)
            match rng.randrange(3):
                case 0:
                    store.add(item)
                case 1:
                    store.set_quantity(item.id, rng.randint(-1, 6))
                case 2:
                    store.remove(item.id)

            snap = store.snapshot()
            assert snap.item_count == sum(line.quantity for line in snap.lines)
            assert snap.subtotal == sum((line.line_total for line in snap.lines), Decimal("0"))
            assert snap.total == snap.subtotal + snap.tax
            assert len(set(snap.item_ids)) == len(snap.lines)


class TestCartTypes:
    def test_line_rejects_zero_quantity(self, vanilla):
        with pytest.raises(ValueError):
            CartLine(vanilla, 0)

    def test_line_total(self, vanilla):
        assert CartLine(vanilla, 3).line_total == Decimal("14.97")

    def test_empty_snapshot(self):
        snap = CartSnapshot()
        assert snap.is_empty
        assert snap.item_count == 0
        assert snap.quantity_of(1) == 0
        assert snap.line_for(1) is None

    def test_tax_rounds_half_up(self):
        item = FlavorItem(9, "Sample", "", Decimal("0.50"), "#FFFFFF", "ic_sample")
        snap = CartSnapshot((CartLine(item, 1),), tax_rate=Decimal("0.01"))
        assert snap.tax == Decimal("0.01")


class TestFormatting:
    def test_summary(self, cart, vanilla):
        cart.add(vanilla)
        cart.add(vanilla)

        assert format_summary(cart.snapshot()) == (
            "2x Vanilla Dream - $9.98\n"
            "\n"
            "Subtotal: $9.98\n"
            "Tax (8%): $0.80\n"
            "Total: $10.78"
        )

    def test_badge(self):
        assert badge_label(0) == "Cart"
        assert badge_label(3) == "Cart (3)"
