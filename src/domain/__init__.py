"""
Domain Layer - Workflow rules for marriage-certificate applications.

This layer has no dependency on frameworks, storage or transport.
"""
