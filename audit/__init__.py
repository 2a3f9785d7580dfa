"""
Centralized Audit Logging System

Tracks who did what, and when, across the console.
"""
