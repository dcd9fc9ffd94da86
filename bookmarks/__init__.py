"""bookmarks/ -- Owner-scoped bookmark persistence.

Layer rule: bookmarks/ imports only stdlib, third-party libraries, and the
shared engine helper from auth.store. Access decisions live in auth/ownership.py
and are applied by the API layer, not here.
"""
