"""Transactions and the deduplicating dataset."""
from .transaction import Transaction
from .dataset import Dataset, create_dataset
