"""Advanzia credit card statement PDF to CSV converter."""

from .converter import convert
from .models import Transaction
from .parser import extract_transactions

__all__ = ["Transaction", "convert", "extract_transactions"]
