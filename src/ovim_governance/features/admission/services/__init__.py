"""Admission services."""

from .admission_webhook import AdmissionWebhook, decode_object

__all__ = ["AdmissionWebhook", "decode_object"]
