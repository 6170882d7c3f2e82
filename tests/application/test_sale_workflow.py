"""Integration tests for the search-then-sell workflow."""

from datetime import date
from decimal import Decimal

from partstock.application.inventory_cache import InventoryCache
from partstock.application.sale_workflow import (
    IDLE,
    NO_MATCHES,
    SEARCH_FAILED,
    SELL_FAILED,
    SOLD_OK,
    Confirming,
    SaleWorkflow,
    Selecting,
)
from partstock.domain.exceptions import (
    AuthenticationRequired,
    EntityNotFoundError,
    InvalidTransition,
    TransportError,
    ValidationError,
)
from partstock.domain.model.part import Part, StockStatus
from partstock.domain.model.value_objects import Money
from tests.fakes import FakePartGateway

TODAY = date(2024, 5, 1)


def _setup(parts=None, token="secret", echo_records=True):
    if parts is None:
        parts = [
            Part(id=1, name="Brake Pad", manufacturer="Bosch", recommended_price=Money.of("300")),
            Part(id=2, name="Brake Disc", manufacturer="Brembo", stock_status=StockStatus.RESERVED),
            Part(id=3, name="Spark Plug", manufacturer="NGK"),
        ]
    gateway = FakePartGateway(parts, sold_on=TODAY, echo_records=echo_records)
    cache = InventoryCache(gateway)
    workflow = SaleWorkflow(cache, gateway, token=token, today=lambda: TODAY)
    return workflow, cache, gateway


def _sell(workflow, part_id, price):
    workflow.select_for_sale(part_id)
    return workflow.confirm_sale(price)


class TestSearch:

    def test_scenario_a_name_match(self):
        workflow, _, _ = _setup([Part(id=1, name="Brake Pad", manufacturer="Bosch")])
        results = workflow.search("brake")
        assert [p.id for p in results] == [1]
        assert workflow.error_message == ""

    def test_scenario_b_no_match_is_not_an_error(self):
        workflow, _, _ = _setup([Part(id=1, name="Brake Pad", manufacturer="Bosch")])
        assert workflow.search("99") == []
        assert workflow.error_message == ""
        assert workflow.info_message == NO_MATCHES

    def test_search_refreshes_from_backend(self):
        workflow, cache, gateway = _setup()
        workflow.search("brake")
        workflow.search("plug")
        assert gateway.fetch_calls == 2
        assert len(cache) == 3

    def test_blank_query_rejected_without_fetch(self):
        workflow, _, gateway = _setup()
        assert workflow.search("   ") == []
        assert gateway.fetch_calls == 0
        assert workflow.error_message == "Enter a part ID or name to search."
        assert isinstance(workflow.last_error, ValidationError)

    def test_transport_failure_keeps_previous_results(self):
        workflow, _, gateway = _setup()
        workflow.search("brake")
        gateway.fail_fetch = True

        results = workflow.search("plug")

        assert [p.id for p in results] == [1, 2]
        assert workflow.error_message == SEARCH_FAILED
        assert isinstance(workflow.last_error, TransportError)
        assert not workflow.loading


class TestSelectAndCancel:

    def test_select_stages_part(self):
        workflow, _, gateway = _setup()
        assert workflow.select_for_sale(2) == Selecting(2)
        assert workflow.sell_id == 2
        assert gateway.fetch_calls == 0

    def test_reselect_discards_draft_price(self):
        workflow, _, _ = _setup()
        workflow.search("brake")
        _sell(workflow, 1, "0")
        assert workflow.state == Confirming(1, "0")

        workflow.select_for_sale(2)
        assert workflow.state == Selecting(2)

    def test_cancel_returns_to_idle(self):
        workflow, cache, gateway = _setup()
        workflow.search("brake")
        workflow.select_for_sale(1)

        assert workflow.cancel_sale() == IDLE
        assert workflow.sell_id is None
        assert gateway.sell_calls == []
        assert cache.get(1).stock_status == StockStatus.AVAILABLE

    def test_cancel_is_idempotent(self):
        workflow, _, _ = _setup()
        assert workflow.cancel_sale() == IDLE
        assert workflow.cancel_sale() == IDLE
        assert workflow.error_message == ""

    def test_confirm_without_selection(self):
        workflow, _, gateway = _setup()
        assert workflow.confirm_sale("100") is None
        assert workflow.error_message == "Select a part to sell first."
        assert isinstance(workflow.last_error, ValidationError)
        assert gateway.sell_calls == []


class TestConfirmSale:

    def test_scenario_c_sale_succeeds(self):
        workflow, cache, gateway = _setup()
        workflow.search("brake")

        sold = _sell(workflow, 1, "250.00")

        assert sold.stock_status == StockStatus.SOLD
        assert sold.sold_price == Money(Decimal("250.00"))
        assert sold.sold_date == TODAY
        assert cache.get(1) == sold
        assert workflow.results[0] == sold
        assert workflow.state == IDLE
        assert workflow.success_message == SOLD_OK
        assert gateway.sell_calls == [(1, Money.of("250.00"), "secret")]

    def test_reserved_part_can_be_sold(self):
        workflow, cache, _ = _setup()
        workflow.search("disc")
        assert _sell(workflow, 2, "999.99") is not None
        assert cache.get(2).is_sold

    def test_scenario_d_resell_rejected(self):
        workflow, cache, gateway = _setup()
        workflow.search("brake")
        sold = _sell(workflow, 1, "250.00")

        assert _sell(workflow, 1, "300") is None

        assert isinstance(workflow.last_error, InvalidTransition)
        assert workflow.error_message == (
            "Cannot mark part #1 (Brake Pad) as sold (current status is sold)"
        )
        assert cache.get(1) == sold
        assert len(gateway.sell_calls) == 1

    def test_scenario_e_zero_price_rejected_before_backend(self):
        workflow, cache, gateway = _setup()
        workflow.search("brake")

        assert _sell(workflow, 1, 0) is None

        assert isinstance(workflow.last_error, InvalidTransition)
        assert gateway.sell_calls == []
        assert cache.get(1).stock_status == StockStatus.AVAILABLE

    def test_negative_price_rejected(self):
        workflow, _, gateway = _setup()
        workflow.search("brake")
        assert _sell(workflow, 1, "-10") is None
        assert isinstance(workflow.last_error, InvalidTransition)
        assert gateway.sell_calls == []

    def test_unparseable_price_rejected(self):
        workflow, _, gateway = _setup()
        workflow.search("brake")
        assert _sell(workflow, 1, "cheap") is None
        assert isinstance(workflow.last_error, ValidationError)
        assert gateway.sell_calls == []

    def test_failure_preserves_staged_state_for_retry(self):
        workflow, _, _ = _setup()
        workflow.search("brake")
        _sell(workflow, 1, "0")
        assert workflow.state == Confirming(1, "0")

        sold = workflow.confirm_sale("120")
        assert sold is not None
        assert sold.sold_price == Money.of("120")

    def test_transport_failure_leaves_cache_untouched(self):
        workflow, cache, gateway = _setup()
        workflow.search("brake")
        gateway.fail_sell = True

        assert _sell(workflow, 1, "250") is None

        assert workflow.error_message == SELL_FAILED
        assert isinstance(workflow.last_error, TransportError)
        assert cache.get(1).stock_status == StockStatus.AVAILABLE
        assert workflow.state == Confirming(1, "250")
        assert not workflow.in_flight

    def test_session_usable_after_failure(self):
        workflow, _, gateway = _setup()
        workflow.search("brake")
        gateway.fail_sell = True
        _sell(workflow, 1, "250")

        gateway.fail_sell = False
        assert workflow.confirm_sale("250") is not None
        assert workflow.error_message == ""

    def test_part_not_in_cache(self):
        workflow, _, gateway = _setup()
        workflow.search("brake")
        assert _sell(workflow, 42, "10") is None
        assert isinstance(workflow.last_error, EntityNotFoundError)
        assert workflow.error_message == "Part #42 is not in the inventory; search again"
        assert gateway.sell_calls == []

    def test_no_token_means_no_request(self):
        workflow, cache, gateway = _setup(token="")
        workflow.search("brake")

        assert _sell(workflow, 1, "250") is None

        assert isinstance(workflow.last_error, AuthenticationRequired)
        assert gateway.sell_calls == []
        assert cache.get(1).stock_status == StockStatus.AVAILABLE

    def test_acknowledgement_without_record_uses_local_transition(self):
        workflow, cache, _ = _setup(echo_records=False)
        workflow.search("brake")

        sold = _sell(workflow, 1, "250")

        assert sold.sold_date == TODAY
        assert sold.recommended_price == Money.of("300")
        assert cache.get(1) == sold

    def test_unsold_echo_is_not_committed(self):
        workflow, cache, gateway = _setup()
        workflow.search("brake")
        gateway.sell_reply = cache.get(1)

        sold = _sell(workflow, 1, "250")

        assert sold.stock_status == StockStatus.SOLD
        assert sold.sold_date == TODAY
        assert sold.sold_price == Money.of("250")
        assert cache.get(1) == sold
        assert cache.get(1).is_consistent
        assert workflow.success_message == SOLD_OK

    def test_sold_echo_missing_price_is_not_committed(self):
        workflow, cache, gateway = _setup()
        workflow.search("brake")
        gateway.sell_reply = Part(
            id=1, name="Brake Pad", manufacturer="Bosch",
            stock_status=StockStatus.SOLD, sold_date=TODAY,
        )

        sold = _sell(workflow, 1, "250")

        assert sold.sold_price == Money.of("250")
        assert cache.get(1).is_consistent

    def test_echo_for_another_part_is_not_committed(self):
        workflow, cache, gateway = _setup()
        workflow.search("p")
        spark_plug = cache.get(3)
        gateway.sell_reply = Part(
            id=3, name="Spark Plug", manufacturer="NGK",
            stock_status=StockStatus.SOLD, sold_date=TODAY, sold_price=Money.of("90"),
        )

        sold = _sell(workflow, 1, "250")

        assert sold.id == 1
        assert cache.get(1) == sold
        assert cache.get(3) == spark_plug
        assert next(p for p in workflow.results if p.id == 3) == spark_plug
        assert workflow.info_message == ""

    def test_other_results_untouched(self):
        workflow, _, _ = _setup()
        before = workflow.search("brake")
        _sell(workflow, 1, "250")
        assert workflow.results[1] == before[1]


class TestCacheDesync:

    def test_part_dropped_mid_workflow(self):
        workflow, cache, gateway = _setup()
        workflow.search("brake")
        workflow.select_for_sale(1)

        def drop_and_refresh():
            gateway.drop(1)
            cache.refresh()

        gateway.on_sell = drop_and_refresh
        sold = workflow.confirm_sale("250")

        # The sale itself went through; the cache just lost track of the part.
        assert sold is not None
        assert workflow.state == IDLE
        assert cache.get(1) is None
        assert workflow.info_message == (
            "Part #1 is no longer in the inventory; search again to refresh"
        )


class TestReentrancy:

    def test_second_confirm_while_in_flight_is_ignored(self):
        workflow, _, gateway = _setup()
        workflow.search("brake")
        workflow.select_for_sale(1)
        nested = []

        def click_again():
            assert workflow.in_flight
            nested.append(workflow.confirm_sale("999"))

        gateway.on_sell = click_again
        sold = workflow.confirm_sale("250")

        assert nested == [None]
        assert len(gateway.sell_calls) == 1
        assert sold.sold_price == Money.of("250")

    def test_cancel_while_in_flight_is_ignored(self):
        workflow, _, gateway = _setup()
        workflow.search("brake")
        workflow.select_for_sale(1)
        gateway.on_sell = workflow.cancel_sale

        sold = workflow.confirm_sale("250")

        assert sold is not None
        assert workflow.state == IDLE
