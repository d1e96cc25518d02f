"""
Client and supplier stores.

Both keep an outstanding money balance in credit_balance and
accept payments.
"""

from shop_ledger.models.client import Client, ClientPayment, ClientHistory
from shop_ledger.models.enums import EntityKind
from shop_ledger.models.supplier import (
    Supplier,
    SupplierPayment,
    SupplierHistory,
)
from shop_ledger.store.base import EntityStore


class ClientStore(EntityStore):
    kind = EntityKind.CLIENT
    entity_model = Client
    history_model = ClientHistory
    payment_model = ClientPayment

    owner_field = "client_id"
    balance_field = "credit_balance"
    history_type_field = "type"
    history_amount_field = "amount"

    COMMANDS = {
        "insert": "insert_client",
        "update": "update_client",
        "delete": "delete_client",
        "list": "get_clients",
        "get_by_id": "get_client_by_id",
        "adjust_balance": "adjust_client_balance",
        "insert_history": "insert_client_history",
        "get_history": "get_client_history",
        "add_payment": "add_client_payment",
        "get_payments": "get_client_payments",
    }


class SupplierStore(EntityStore):
    kind = EntityKind.SUPPLIER
    entity_model = Supplier
    history_model = SupplierHistory
    payment_model = SupplierPayment

    owner_field = "supplier_id"
    balance_field = "credit_balance"
    history_type_field = "type"
    history_amount_field = "amount"

    COMMANDS = {
        "insert": "insert_supplier",
        "update": "update_supplier",
        "delete": "delete_supplier",
        "list": "get_suppliers",
        "get_by_id": "get_supplier_by_id",
        "adjust_balance": "adjust_supplier_credit",
        "insert_history": "insert_supplier_history",
        "get_history": "get_supplier_history",
        "add_payment": "add_supplier_payment",
        "get_payments": "get_supplier_payments",
    }
