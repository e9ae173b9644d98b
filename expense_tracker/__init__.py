"""
Expense Tracker - Source Package

A small personal expense tracker: add named expenses with an amount and
a category, list them, sort by amount, filter by category and delete them.

DESIGN PRINCIPLES:
1. The store is the single source of truth
2. Every mutation is written through to storage immediately
3. Storage failures never crash the app
4. Every change is observable and auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Expense Tracker Team"
