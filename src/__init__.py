"""
Land Clearing Proposal Service.

Prices land-clearing jobs and carries customer proposals from draft to paid.
"""

__version__ = "0.1.0"
__description__ = "Land Clearing Proposal Service"
