"""
Unit tests for the cart reducer.
"""

import pytest

from lesson_cart.cart import reducer
from lesson_cart.cart.reducer import CartIndexError
from lesson_cart.models.lesson import Lesson
from lesson_cart.models.order import Customer, Payment


def space_of(state, lesson_id):
    return state.find_lesson(lesson_id).space


class TestAddToCart:

    def test_add_decrements_space(self, state):
        new_state = reducer.add_to_cart(state, state.find_lesson("L1"))

        assert len(new_state.cart) == 1
        assert space_of(new_state, "L1") == 3
        assert new_state.cart[0].space == 4

    def test_original_state_untouched(self, state):
        reducer.add_to_cart(state, state.find_lesson("L1"))

        assert state.cart == ()
        assert space_of(state, "L1") == 4

    def test_full_lesson_is_noop(self, state):
        new_state = reducer.add_to_cart(state, state.find_lesson("L3"))

        assert new_state is state

    def test_last_place(self, state):
        once = reducer.add_to_cart(state, state.find_lesson("L2"))
        twice = reducer.add_to_cart(once, once.find_lesson("L2"))

        assert space_of(once, "L2") == 0
        assert twice is once

    def test_store_copy_is_authoritative(self, state):
        stale = Lesson(id="L2", topic="Art", price=35, space=9)
        once = reducer.add_to_cart(state, stale)

        # The stale copy still claims 9 places; the store has none left
        twice = reducer.add_to_cart(once, stale)

        assert len(twice.cart) == 1
        assert space_of(twice, "L2") == 0

    def test_unknown_lesson_is_noop(self, state):
        assert reducer.add_to_cart(state, Lesson(id="nope", space=5)) is state

    def test_store_order_preserved(self, state):
        new_state = reducer.add_to_cart(state, state.find_lesson("L2"))

        assert [lesson.id for lesson in new_state.lessons] == ["L1", "L2", "L3"]


class TestRemoveFromCart:

    @pytest.fixture
    def filled(self, state):
        state = reducer.add_to_cart(state, state.find_lesson("L1"))
        state = reducer.add_to_cart(state, state.find_lesson("L2"))
        return reducer.add_to_cart(state, state.find_lesson("L1"))

    def test_remove_restores_one_place(self, filled):
        assert space_of(filled, "L1") == 2

        new_state = reducer.remove_from_cart(filled, 0)

        assert len(new_state.cart) == 2
        assert space_of(new_state, "L1") == 3
        assert space_of(new_state, "L2") == 0
        assert [item.id for item in new_state.cart] == ["L2", "L1"]

    def test_remove_last_entry(self, filled):
        new_state = reducer.remove_from_cart(filled, 2)

        assert [item.id for item in new_state.cart] == ["L1", "L2"]
        assert space_of(new_state, "L1") == 3

    @pytest.mark.parametrize("index", [-1, 3, 10])
    def test_out_of_range(self, filled, index):
        with pytest.raises(CartIndexError):
            reducer.remove_from_cart(filled, index)

    def test_empty_cart(self, state):
        with pytest.raises(IndexError):
            reducer.remove_from_cart(state, 0)

    def test_lesson_missing_from_store(self, filled):
        searched = reducer.replace_lessons(filled, [Lesson(id="L2", space=1)])

        new_state = reducer.remove_from_cart(searched, 0)

        assert len(new_state.cart) == 2
        assert new_state.lessons == searched.lessons


class TestReplaceLessons:

    def test_plain_replace(self, state):
        fresh = [Lesson(id="L9", topic="Chess", space=2)]

        new_state = reducer.replace_lessons(state, fresh)

        assert [lesson.id for lesson in new_state.lessons] == ["L9"]

    def test_cart_reservations_applied(self, state):
        state = reducer.add_to_cart(state, state.find_lesson("L1"))
        state = reducer.add_to_cart(state, state.find_lesson("L1"))

        # Backend has not been told yet, it still reports 4
        new_state = reducer.replace_lessons(state, [Lesson(id="L1", space=4)])

        assert space_of(new_state, "L1") == 2
        assert len(new_state.cart) == 2

    def test_reservation_never_negative(self, state):
        state = reducer.add_to_cart(state, state.find_lesson("L1"))

        new_state = reducer.replace_lessons(state, [Lesson(id="L1", space=0)])

        assert space_of(new_state, "L1") == 0


class TestFormAndViewState:

    def test_set_customer_partial(self, state):
        state = reducer.set_customer(state, name="Ann Lee")
        state = reducer.set_customer(state, phone="5551234")

        assert state.customer == Customer("Ann Lee", "5551234")

    def test_set_sort(self, state):
        new_state = reducer.set_sort(state, "price", "desc")

        assert new_state.sort_by == "price"
        assert new_state.sort_dir == "desc"

    @pytest.mark.parametrize("sort_by, sort_dir", [("colour", "asc"), ("price", "up")])
    def test_set_sort_invalid(self, state, sort_by, sort_dir):
        with pytest.raises(ValueError):
            reducer.set_sort(state, sort_by, sort_dir)

    def test_toggle_cart(self, state):
        assert reducer.toggle_cart(state).show_cart is True
        assert reducer.toggle_cart(reducer.toggle_cart(state)).show_cart is False

    def test_set_search_query(self, state):
        assert reducer.set_search_query(state, "math").search_query == "math"


class TestCheckoutTransitions:

    @pytest.fixture
    def ready(self, state):
        state = reducer.add_to_cart(state, state.find_lesson("L1"))
        state = reducer.set_customer(state, name="Ann Lee", phone="5551234")
        return reducer.set_payment(state, Payment.from_plain("4111111111111111", "12/27", "123"))

    def test_begin_checkout(self, ready):
        busy = reducer.begin_checkout(ready)

        assert busy.is_checking_out
        assert busy.confirmation == ""

    def test_complete_clears_cart_and_forms(self, ready):
        done = reducer.complete_checkout(reducer.begin_checkout(ready), "Your order has been placed!")

        assert done.cart == ()
        assert done.customer == Customer()
        assert done.payment.is_empty
        assert done.confirmation == "Your order has been placed!"
        assert not done.is_checking_out
        assert space_of(done, "L1") == 3

    def test_complete_without_payment(self, state):
        done = reducer.complete_checkout(state, "ok")

        assert done.payment is None

    def test_fail_keeps_cart(self, ready):
        failed = reducer.fail_checkout(reducer.begin_checkout(ready), "Checkout failed")

        assert failed.cart == ready.cart
        assert failed.customer == ready.customer
        assert failed.confirmation == "Checkout failed"
        assert not failed.is_checking_out
