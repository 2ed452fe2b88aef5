"""
Clinic Booking Application Layer
"""
