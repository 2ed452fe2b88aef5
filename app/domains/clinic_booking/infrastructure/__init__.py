"""
Clinic Booking Infrastructure Layer
"""
