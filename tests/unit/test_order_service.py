"""
Unit tests for the order business logic over an in-memory table store.
"""

import pytest

from storefront.dal.memory_handler import InMemoryTableStore
from storefront.dal.schema import ORDERS_SCHEMA
from storefront.handlers.utils.errors import MissingIdError, NotFoundError
from storefront.logic.order_service import OrderService
from storefront.models.input import CreateOrderCommand, UpdateOrderCommand


def _create(service: OrderService, **fields) -> str:
    return service.create_order(CreateOrderCommand.model_validate(fields))


class TestCreateOrder:
    """Test cases for placing orders."""

    def test_creates_table_with_header_on_first_order(self, empty_store):
        service = OrderService(empty_store)

        order_id = _create(service, productId="P1", unitPrice="10", quantity="3")

        values = empty_store.get_values("Orders")
        assert values[0] == ORDERS_SCHEMA.header
        assert len(values) == 2
        assert values[1][0] == order_id

    def test_appended_row_layout(self, empty_store):
        service = OrderService(empty_store)

        order_id = _create(
            service, productId="P1", productTitle="Mango pickle", unitPrice="10", quantity="3",
            customerName="Asha Rao", phone="555-1234", address="12 MG Road", pinCode="560001", place="Bengaluru",
        )

        row = dict(zip(ORDERS_SCHEMA.header, empty_store.get_values("Orders")[1]))
        assert row["OrderID"] == order_id
        assert row["Timestamp"]
        assert row["ProductID"] == "P1"
        assert row["UnitPrice"] == 10.0
        assert row["Quantity"] == 3.0
        assert row["ExtraAmount"] == 0.0
        assert row["TotalAmount"] == 30.0
        assert row["PinCode"] == "560001"
        assert row["Status"] == "NEW"

    def test_appends_to_existing_table(self, memory_store):
        service = OrderService(memory_store)

        _create(service, productId="P2")

        assert len(memory_store.get_values("Orders")) == 5

    def test_existing_reordered_header_keeps_alignment(self):
        store = InMemoryTableStore({"Orders": [["Status", "OrderID", "Phone"]]})
        service = OrderService(store)

        order_id = _create(service, phone="555-1234")

        assert store.get_values("Orders")[1] == ["NEW", order_id, "555-1234"]

    def test_ids_are_unique(self, empty_store):
        service = OrderService(empty_store)

        ids = [_create(service, productId="P1") for _ in range(25)]

        assert len(set(ids)) == 25

    @pytest.mark.parametrize("blank_header", [[], ["", "  "]])
    def test_blank_existing_table_gets_header(self, blank_header):
        store = InMemoryTableStore({"Orders": [blank_header]})
        service = OrderService(store)

        order_id = _create(service, productId="P1", unitPrice="10", quantity="3")

        values = store.get_values("Orders")
        assert values[0] == ORDERS_SCHEMA.header
        assert values[1][0] == order_id
        assert values[1][7] == 30.0

    def test_non_finite_amounts_are_stored_as_zero(self, empty_store):
        service = OrderService(empty_store)

        _create(service, unitPrice="nan", quantity="inf", extraAmount="1")

        row = empty_store.get_values("Orders")[1]
        assert row[4:8] == [0.0, 0.0, 1.0, 1.0]

    def test_caller_total_amount_is_stored(self, empty_store):
        service = OrderService(empty_store)

        _create(service, unitPrice="10", quantity="3", totalAmount="25")

        assert empty_store.get_values("Orders")[1][7] == 25.0


class TestListOrders:
    """Test cases for listing orders."""

    def test_list_all_in_table_order(self, memory_store):
        orders = OrderService(memory_store).list_all_orders()

        assert [order["OrderID"] for order in orders] == ["ord-1", "ord-2", "ord-3"]
        assert orders[0]["TotalAmount"] == 538
        assert orders[1]["Status"] == "SHIPPED"

    def test_list_all_missing_or_empty_table(self, empty_store):
        assert OrderService(empty_store).list_all_orders() == []

        empty_store.create_table("Orders", ORDERS_SCHEMA.header)
        assert OrderService(empty_store).list_all_orders() == []

    def test_filter_by_phone_is_exact_after_trim(self, memory_store):
        orders = OrderService(memory_store).list_orders_by_phone("555-1234")

        assert [order["OrderID"] for order in orders] == ["ord-1", "ord-2"]

    def test_filter_trims_the_query(self, memory_store):
        orders = OrderService(memory_store).list_orders_by_phone("  555-12345 ")

        assert [order["OrderID"] for order in orders] == ["ord-3"]

    def test_filter_no_phone_column(self):
        store = InMemoryTableStore({"Orders": [["OrderID", "Status"], ["ord-1", "NEW"]]})

        assert OrderService(store).list_orders_by_phone("555-1234") == []

    def test_filter_matches_numeric_phone_cells(self):
        store = InMemoryTableStore({"Orders": [["OrderID", "Phone"], ["ord-1", 5551234], ["ord-2", 5551234.0]]})

        orders = OrderService(store).list_orders_by_phone("5551234")

        assert [order["OrderID"] for order in orders] == ["ord-1", "ord-2"]

    def test_created_order_found_once_by_phone(self, memory_store):
        service = OrderService(memory_store)
        order_id = _create(service, phone="999-0000")

        orders = service.list_orders_by_phone("999-0000")

        assert [order["OrderID"] for order in orders] == [order_id]


class TestUpdateOrder:
    """Test cases for partial order updates."""

    def test_status_update_changes_only_status(self, memory_store):
        before = memory_store.get_values("Orders")

        OrderService(memory_store).update_order(UpdateOrderCommand(order_id="ord-1", status="SHIPPED"))

        after = memory_store.get_values("Orders")
        assert after[1][13] == "SHIPPED"
        assert after[1][:13] == before[1][:13]
        assert after[2:] == before[2:]

    def test_updates_supported_fields(self, memory_store):
        OrderService(memory_store).update_order(UpdateOrderCommand(
            order_id="ord-2", phone="555-9999", address="1 New Street", pin="700001", place="Howrah",
        ))

        row = dict(zip(ORDERS_SCHEMA.header, memory_store.get_values("Orders")[2]))
        assert row["Phone"] == "555-9999"
        assert row["Address"] == "1 New Street"
        assert row["PinCode"] == "700001"
        assert row["Place"] == "Howrah"
        assert row["Status"] == "SHIPPED"

    def test_empty_values_are_ignored(self, memory_store):
        before = memory_store.get_values("Orders")

        OrderService(memory_store).update_order(UpdateOrderCommand(order_id="ord-1", status="", address=""))

        assert memory_store.get_values("Orders") == before

    def test_skips_columns_missing_from_header(self):
        store = InMemoryTableStore({"Orders": [["OrderID", "Status"], ["ord-1", "NEW"]]})

        OrderService(store).update_order(UpdateOrderCommand(order_id="ord-1", status="PAID", place="Pune"))

        assert store.get_values("Orders") == [["OrderID", "Status"], ["ord-1", "PAID"]]

    def test_first_matching_row_only(self):
        store = InMemoryTableStore({"Orders": [["OrderID", "Status"], ["dup", "NEW"], ["dup", "NEW"]]})

        OrderService(store).update_order(UpdateOrderCommand(order_id="dup", status="PAID"))

        assert store.get_values("Orders")[1:] == [["dup", "PAID"], ["dup", "NEW"]]

    def test_missing_order_id(self, memory_store):
        with pytest.raises(MissingIdError) as exc_info:
            OrderService(memory_store).update_order(UpdateOrderCommand(status="PAID"))

        assert exc_info.value.message == "orderId required"

    @pytest.mark.parametrize("tables,message", [
        ({}, "Orders sheet not found"),
        ({"Orders": [ORDERS_SCHEMA.header]}, "No orders"),
        ({"Orders": [ORDERS_SCHEMA.header, ["ord-1"] + [""] * 13]}, "Order not found"),
    ])
    def test_not_found(self, tables, message):
        store = InMemoryTableStore(tables)

        with pytest.raises(NotFoundError) as exc_info:
            OrderService(store).update_order(UpdateOrderCommand(order_id="missing", status="PAID"))

        assert exc_info.value.message == message


class TestDeleteOrder:
    """Test cases for deleting orders."""

    def test_delete_removes_row(self, memory_store):
        OrderService(memory_store).delete_order("ord-2")

        assert [row[0] for row in memory_store.get_values("Orders")[1:]] == ["ord-1", "ord-3"]

    def test_delete_nonexistent_leaves_table_unchanged(self, memory_store):
        before = memory_store.get_values("Orders")

        with pytest.raises(NotFoundError) as exc_info:
            OrderService(memory_store).delete_order("nonexistent")

        assert exc_info.value.message == "Order not found"
        assert memory_store.get_values("Orders") == before

    def test_delete_missing_table(self, empty_store):
        with pytest.raises(NotFoundError) as exc_info:
            OrderService(empty_store).delete_order("ord-1")

        assert exc_info.value.message == "Orders sheet not found"

    @pytest.mark.parametrize("order_id", [None, ""])
    def test_delete_missing_order_id(self, memory_store, order_id):
        with pytest.raises(MissingIdError):
            OrderService(memory_store).delete_order(order_id)

    def test_custom_table_name(self):
        store = InMemoryTableStore({"Bestellungen": [["OrderID"], ["ord-1"]]})

        OrderService(store, table_name="Bestellungen").delete_order("ord-1")

        assert store.get_values("Bestellungen") == [["OrderID"]]
