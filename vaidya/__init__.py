"""
Vaidya

A FastAPI healthcare appointment service with email/password authentication,
role-based patient and doctor access, vitals, health records and prescriptions.
"""

__version__ = "1.0.0"
