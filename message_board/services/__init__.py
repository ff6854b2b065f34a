"""
Message board services.

- user_registry: account creation and lookup
- session_manager: login sessions and the per-request identity
"""
