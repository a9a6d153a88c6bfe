"""Bookings app package.

Holds the booking model together with the admission and mutation
services. Bookings embed a snapshot of the car they were made for, and
the availability check runs in the same database transaction as the
write that depends on it.
"""
