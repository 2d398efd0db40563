"""
Core arithmetic engine and data contracts.

This module contains the foundational building blocks that are independent
of the presentation layer (tables, input fields, reference-digit files).
"""
