"""
Services module for business logic separation.

Service classes wrap the database models so endpoints stay thin.
"""
