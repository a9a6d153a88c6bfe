"""Cars app package.

The rental fleet. Bookings never reference a car row directly; they keep
a snapshot of it taken when the booking is admitted.
"""
