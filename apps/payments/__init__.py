"""Payments app package.

Checkout is a stub: no gateway is contacted. A checkout request creates
a booking that is already confirmed and paid, and the confirmation
endpoint only reads it back.
"""
