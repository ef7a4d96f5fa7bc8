"""
Application Layer for the RepCompanion analytics API.

This package contains:
- ports/: Abstract repository and sync interfaces (what the analytics core needs)
- exceptions.py: Errors raised by services and translated by the routers
"""
