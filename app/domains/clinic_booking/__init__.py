"""
Clinic Booking Domain

Bounded context for booking dental clinic appointments: slot availability,
double-booking protection, effective status and calendar export.
"""
