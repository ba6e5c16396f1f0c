"""
Twilio Settings Module

Per-RTO messaging provider credentials and sender numbers.

API Endpoints:
- GET/PUT /rtos/{rto_id}/twilio/config
- GET/POST /rtos/{rto_id}/twilio/senders

Security Features:
- AES-256-GCM encryption of the provider auth token at rest
- Masked token display (last 4 characters only)
- E.164 validation of sender numbers
"""

from .router import router

__all__ = ["router"]
