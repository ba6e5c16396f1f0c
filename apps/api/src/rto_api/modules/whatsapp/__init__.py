"""
WhatsApp Messaging Module

Outbound WhatsApp sends through the RTO's Twilio account. Destinations are
canonicalized to E.164 and credentials decrypted before any provider call.

API Endpoints:
- POST /rtos/{rto_id}/whatsapp/messages
"""

from .router import router

__all__ = ["router"]
