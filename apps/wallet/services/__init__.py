"""Services for wallet business logic."""

from .exceptions import (
    WalletServiceError,
    InvalidAmountError,
    InsufficientBalanceError,
    RecipientNotFoundError,
    SelfTransferError,
    TransactionNotFoundError,
    InvalidTransactionStateError,
    NotificationNotFoundError,
    PayMongoError,
)
from .ledger import (
    normalize_amount,
    get_balance,
    lock_wallets,
    record_transaction,
    update_transaction_status,
    get_transaction,
    list_transactions,
    get_wallet_summary,
)
from .notifications import (
    notify,
    notify_transaction,
    list_notifications,
    get_unread_count,
    mark_notification_read,
    mark_all_notifications_read,
)
from .transfers import find_recipient, send_money, cash_out
from .cash_in import create_cash_in, verify_cash_in
from .wallet_qr import wallet_qr_payload, generate_wallet_qr

__all__ = [
    # Exceptions
    'WalletServiceError',
    'InvalidAmountError',
    'InsufficientBalanceError',
    'RecipientNotFoundError',
    'SelfTransferError',
    'TransactionNotFoundError',
    'InvalidTransactionStateError',
    'NotificationNotFoundError',
    'PayMongoError',
    # Ledger
    'normalize_amount',
    'get_balance',
    'lock_wallets',
    'record_transaction',
    'update_transaction_status',
    'get_transaction',
    'list_transactions',
    'get_wallet_summary',
    # Notifications
    'notify',
    'notify_transaction',
    'list_notifications',
    'get_unread_count',
    'mark_notification_read',
    'mark_all_notifications_read',
    # Transfers
    'find_recipient',
    'send_money',
    'cash_out',
    'create_cash_in',
    'verify_cash_in',
    'wallet_qr_payload',
    'generate_wallet_qr',
]
