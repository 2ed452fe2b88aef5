"""
Clinic Booking API Layer
"""
