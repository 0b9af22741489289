"""Paydesk: manual UPI payment collection backend."""
