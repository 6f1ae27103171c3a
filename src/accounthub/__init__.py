"""AccountHub - users, accounts and the access relationships between them.

Every account has exactly one PRIMARY user and any number of AUTHORIZED
users, with balances kept as exact decimals.
"""

__version__ = "0.1.0"
