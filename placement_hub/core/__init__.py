"""
Core module - settings, authentication, authorization policy,
status machines, errors and logging.
"""
