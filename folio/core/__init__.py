"""
Core utilities for Folio: exceptions, logging, paths and CLI helpers.
"""
