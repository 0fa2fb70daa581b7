"""
Domain exceptions for the catalog and ledger business logic

Raised by the business layer; the presentation layer maps each class to an
HTTP status through its status_code attribute.
"""


class StockLedgerError(Exception):
    """Base exception for all stock ledger domain errors"""
    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class ValidationError(StockLedgerError):
    """Raised when input is missing or out of range"""
    status_code = 400


class NotFoundError(StockLedgerError):
    """Raised when the targeted product or supplier does not exist"""
    status_code = 404


class InsufficientStockError(StockLedgerError):
    """Raised when a sale would drive a product's stock below zero"""
    status_code = 400

    def __init__(self, message="Insufficient stock for this product."):
        super().__init__(message)


class PersistenceError(StockLedgerError):
    """Raised when a database write fails; the transaction has been rolled back"""
    status_code = 500
