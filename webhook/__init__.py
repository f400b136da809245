"""
Webhook module - FastAPI route handlers.

Includes:
- whatsapp.py: WhatsApp Cloud API subscription check and message events
"""

from webhook.whatsapp import router as whatsapp_router

__all__ = ["whatsapp_router"]
