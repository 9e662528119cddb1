# ==============================================================================
# SERVICES PACKAGE INITIALIZATION
# ==============================================================================

"""
Service Layer
=============

Business logic for the order lifecycle:
- OrderService: Checkout, status updates, reads and export
- CustomerResolver: Find-or-create customers by email
- OrderNotifier: Transactional emails
- order_export: CSV row building
"""

from roastery.services.customer_service import CustomerResolver
from roastery.services.notification_service import OrderNotifier
from roastery.services.order_service import OrderService

__all__ = [
    "CustomerResolver",
    "OrderNotifier",
    "OrderService",
]
