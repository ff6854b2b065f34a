"""
Common utilities for the message board: password hashing and session
tokens (auth), logging (logger), and database retry classification
(retry_utils).

Submodules are imported directly; config depends on the logger, so this
package must not import anything that reads settings.
"""
